"""
Global Configuration for Orrery Package
=======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, validation behavior, event search defaults
and default plotting options.

Examples
--------
View current configuration:

>>> import orrery
>>> print(orrery.config)

Modify settings:

>>> orrery.config.KEPLER_TOL = 1e-10  # Tighter Kepler solve
>>> orrery.config.RESONANCE_TOL = 0.02  # Stricter commensurability test

Reset to defaults:

>>> orrery.config.reset()

Temporarily modify settings:

>>> with orrery.temp_config(STRICT_VALIDATION=False):
...     # Invalid elements only warn inside this block
...     orbit = orrery.OE(a=-1.0, period=10.0, e=0.0, i=0.0)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class OrreryConfig:
    """
    Global configuration for Orrery package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    HASH_DECIMALS : int
        Number of decimal places for rounding when computing hash values.
        Automatically computed to preserve hash contract
    SNAP_TO_ZERO_THRESHOLD : float
        Angles closer than this to 0 or 2π are treated as exactly zero
        by the phase-angle calculation.
        Default: 1e-10
    SNAP_TO_CIRCULAR : float
        Eccentricity below this threshold treated as circular orbit when
        recovering elements from state vectors.
        Default: 1e-8
    SNAP_TO_EQUATORIAL : float
        Node vector magnitude (relative to |h|) below this threshold treated
        as an equatorial orbit when recovering elements from state vectors.
        Default: 1e-8
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    KEPLER_TOL : float
        Absolute convergence tolerance on the eccentric anomaly step.
        Default: 1e-6
    KEPLER_MAX_ITER : int
        Iteration cap for the Newton-Raphson Kepler solver.
        Default: 30
    RESONANCE_TOL : float
        Absolute tolerance on |ratio - p/q| for a pair to count as resonant.
        Default: 0.05
    RESONANCE_MIN_OFFSET : float
        Smallest offset used when scoring strength, so an exact
        commensurability still has a finite strength.
        Default: 1e-12
    DEFAULT_EVENT_STEP : float
        Default step size for conjunction/opposition searches.
        Default: 0.1
    MIN_STEPS_PER_SYNODIC : int
        Event searches warn when a synodic period spans fewer steps than this.
        Default: 4
    STABILITY_HILL_FACTOR : float
        A moon is stable only if its Hill radius is at least this many
        times its physical radius.
        Default: 3.0
    DEFAULT_PLOT_POINTS : int
        Default number of points per orbit for plotting.
        Default: 360
    DEFAULT_BODY_COLOR : str
        Default color for the central body in plots.
        Default: 'lightseagreen'
    DEFAULT_ORBIT_COLOR : str
        Default color for orbit lines in plots.
        Default: 'white'
    DEFAULT_BODY_OPACITY : float
        Default opacity for the central body sphere (0.0 to 1.0).
        Default: 0.6
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Snapping behavior thresholds
    SNAP_TO_ZERO_THRESHOLD: float = 1e-10
    SNAP_TO_CIRCULAR: float = 1e-8
    SNAP_TO_EQUATORIAL: float = 1e-8

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Kepler solver
    KEPLER_TOL: float = 1e-6
    KEPLER_MAX_ITER: int = 30

    # Dynamical analysis
    RESONANCE_TOL: float = 0.05
    RESONANCE_MIN_OFFSET: float = 1e-12
    DEFAULT_EVENT_STEP: float = 0.1
    MIN_STEPS_PER_SYNODIC: int = 4
    STABILITY_HILL_FACTOR: float = 3.0

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 360
    DEFAULT_BODY_COLOR: str = 'lightseagreen'
    DEFAULT_ORBIT_COLOR: str = 'white'
    DEFAULT_BODY_OPACITY: float = 0.6

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.

        The hash rounding must be coarse enough that if two values
        are equal (within EQUALITY_ATOL), they hash to the same value.

        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2

        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orrery
        >>> orrery.config.KEPLER_TOL = 1e-3  # Modify
        >>> orrery.config.reset()  # Back to defaults
        >>> orrery.config.KEPLER_TOL
        1e-06
        """
        defaults = OrreryConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrreryConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Snapping Thresholds:")
        lines.append(f"    SNAP_TO_ZERO_THRESHOLD = {self.SNAP_TO_ZERO_THRESHOLD}")
        lines.append(f"    SNAP_TO_CIRCULAR = {self.SNAP_TO_CIRCULAR}")
        lines.append(f"    SNAP_TO_EQUATORIAL = {self.SNAP_TO_EQUATORIAL}")
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_TOL = {self.KEPLER_TOL}")
        lines.append(f"    KEPLER_MAX_ITER = {self.KEPLER_MAX_ITER}")
        lines.append("  Dynamical Analysis:")
        lines.append(f"    RESONANCE_TOL = {self.RESONANCE_TOL}")
        lines.append(f"    RESONANCE_MIN_OFFSET = {self.RESONANCE_MIN_OFFSET}")
        lines.append(f"    DEFAULT_EVENT_STEP = {self.DEFAULT_EVENT_STEP}")
        lines.append(f"    MIN_STEPS_PER_SYNODIC = {self.MIN_STEPS_PER_SYNODIC}")
        lines.append(f"    STABILITY_HILL_FACTOR = {self.STABILITY_HILL_FACTOR}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    DEFAULT_ORBIT_COLOR = '{self.DEFAULT_ORBIT_COLOR}'")
        lines.append(f"    DEFAULT_BODY_OPACITY = {self.DEFAULT_BODY_OPACITY}")
        return "\n".join(lines)


# Global configuration instance
config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orrery
    >>> with orrery.temp_config(RESONANCE_TOL=0.2):
    ...     records = orrery.find_resonances(catalog)
    >>> # Original config restored here
    >>> orrery.config.RESONANCE_TOL
    0.05

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"OrreryConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
