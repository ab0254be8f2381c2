'''Orbit definition for a body of the planetary system
OrbitalElements class definition'''

import numpy as np

from .config import config
from .utils import validation_error, TWO_PI


class OrbitalElements:
    """
    Represents the closed Keplerian orbit of one body about the primary.

    Elements are stored as a read-only 7-vector
    ``[a, period, e, i, w, omega, M0]``:

    - a      semi-major axis (distance unit, > 0)
    - period orbital period (time unit, != 0; negative means retrograde)
    - e      eccentricity, 0 <= e < 1
    - i      inclination [rad]
    - w      argument of periapsis [rad]
    - omega  longitude of the ascending node [rad]
    - M0     mean anomaly at epoch (time = 0) [rad]

    Distances and times are in whatever consistent units the catalog uses;
    the gravitational parameter is derived from a and period rather than
    supplied. OrbitalElements is immutable, create a new instance (or use
    ``replace``) to change a value.
    """
    # ========== CLASS CONSTANTS ==========
    FIELDS = ('a', 'period', 'e', 'i', 'w', 'omega', 'M0')
    # long-form aliases accepted by the constructor
    _ALIASES = {
        'semi_major_axis': 'a',
        'orbital_period': 'period',
        'eccentricity': 'e',
        'inclination': 'i',
        'argument_of_periapsis': 'w',
        'longitude_of_ascending_node': 'omega',
        'mean_anomaly_at_epoch': 'M0',
    }
    _DEFAULTS = {'w': 0.0, 'omega': 0.0, 'M0': 0.0}

    # ========== CONSTRUCTION ==========
    def __init__(self, elements=None, name=None, validate=True, **kwargs):
        """
        Create orbital elements.

        Can be called in two ways:

        1. Array-based:
        OrbitalElements([129900, 33.923, 0.0013, 0.0757, 0, 0, 1.2])

        2. Named parameters (w, omega and M0 default to 0):
        OrbitalElements(a=129900, period=33.923, e=0.0013, i=0.0757)
        OrbitalElements(semi_major_axis=129900, orbital_period=33.923,
                        eccentricity=0.0013, inclination=0.0757)

        Parameters
        ----------
        elements : array-like, optional
            7-element array [a, period, e, i, w, omega, M0]
        name : str, optional
            Body identifier
        validate : bool, optional
            Whether to validate elements (default True)
        **kwargs : dict
            Named parameters (short or long form)
        """
        self._name = name

        if elements is not None:
            if kwargs:
                raise ValueError(
                    "Provide either an elements array or named parameters, not both")
            self.elements = np.array(elements, dtype=float)
        elif kwargs:
            self.elements = self._from_named_params(kwargs)
        else:
            raise ValueError(
                "Must provide either:\n"
                "  - elements array [a, period, e, i, w, omega, M0], or\n"
                "  - named parameters a, period, e, i (w, omega, M0 optional)"
            )
        # Ensure immutability of elements array
        self.elements.flags.writeable = False
        # run validation checks on input parameters (if not flagged otherwise)
        if validate:
            self._validate()

    # ========== VALIDATION ==========
    def _validate(self):
        """Check that elements describe a closed, well-formed orbit
        If validation fails inappropriately, set validate=False for constructor
        """
        if len(self.elements) != 7:
            validation_error("Orbital elements must be 7-element vector")
            return
        if not np.all(np.isfinite(self.elements)):
            validation_error(f"Elements contain NaN or Inf: {self.elements}")
            return

        # angles are plain radians for the orientation transform, any value
        a, period, e = self.elements[:3]
        label = f" for '{self._name}'" if self._name else ""
        if a <= 0:
            validation_error(
                f"Semi-major axis must be positive{label}, got a={a}")
        if period == 0:
            validation_error(f"Orbital period must be non-zero{label}")
        if e < 0 or e >= 1:
            validation_error(
                f"Eccentricity must satisfy 0 <= e < 1{label}, got e={e}")

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_numpy(cls, array, names=None, validate=True):
        """
        Create list of OrbitalElements from NumPy array.

        Parameters
        ----------
        array : np.ndarray
            Array of shape (n_orbits, 7)
        names : sequence of str, optional
        validate : bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        array = np.asarray(array, dtype=float)
        if array.ndim != 2 or array.shape[1] != 7:
            raise ValueError(f"Array must have shape (n, 7), got {array.shape}")
        if names is None:
            names = [None] * len(array)
        elif len(names) != len(array):
            raise ValueError(
                f"Got {len(names)} names for {len(array)} orbits")

        return [cls(row, name=name, validate=validate)
                for row, name in zip(array, names)]

    @classmethod
    def from_dataframe(cls, df, validate=True):
        """
        Create list of OrbitalElements from pandas DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            DataFrame with columns a, period, e, i and optionally w, omega, M0.
            The index is used for body names when it holds strings.
        validate : bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        missing = [c for c in ('a', 'period', 'e', 'i') if c not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing required columns: {missing}")

        orbits = []
        for label, row in df.iterrows():
            params = {k: row[k] for k in cls.FIELDS if k in df.columns}
            name = label if isinstance(label, str) else None
            orbits.append(cls(name=name, validate=validate, **params))
        return orbits

    # ========== PROPERTY ACCESS ==========
    @property
    def name(self):
        """Body identifier (may be None)"""
        return self._name

    @property
    def a(self):
        """Semi-major axis"""
        return self.elements[0]

    @property
    def period(self):
        """Orbital period (negative for retrograde motion)"""
        return self.elements[1]

    @property
    def e(self):
        """Eccentricity"""
        return self.elements[2]

    @property
    def i(self):
        """Inclination [rad]"""
        return self.elements[3]

    @property
    def w(self):
        """Argument of periapsis [rad]"""
        return self.elements[4]

    @property
    def omega(self):
        """Longitude of the ascending node [rad]"""
        return self.elements[5]

    @property
    def M0(self):
        """Mean anomaly at epoch [rad]"""
        return self.elements[6]

    # long-form names
    semi_major_axis = a
    orbital_period = period
    eccentricity = e
    inclination = i
    argument_of_periapsis = w
    longitude_of_ascending_node = omega
    mean_anomaly_at_epoch = M0

    @property
    def is_retrograde(self):
        """True if the body moves clockwise (negative period)"""
        return bool(self.period < 0)

    # ========== ORBITAL PROPERTIES ==========
    def mean_motion(self):
        """
        Signed mean motion n = 2π / period.

        Negative for retrograde bodies, so the mean anomaly decreases with
        time without any special casing downstream.
        """
        return TWO_PI / self.period

    @property
    def mu(self):
        """
        Gravitational parameter implied by Kepler's third law.

        μ = 4π²a³ / period², in the catalog's (scaled) units.
        """
        return 4 * np.pi**2 * self.a**3 / self.period**2

    def mean_anomaly(self, time):
        """Mean anomaly at ``time``, reduced to [0, 2π)"""
        return np.mod(self.mean_motion() * time + self.M0, TWO_PI)

    def periapsis(self):
        """Periapsis distance a(1 - e)"""
        return self.a * (1 - self.e)

    def apoapsis(self):
        """Apoapsis distance a(1 + e)"""
        return self.a * (1 + self.e)

    def specific_energy(self):
        """Specific orbital energy -μ / 2a"""
        return -self.mu / (2 * self.a)

    def specific_angular_momentum(self):
        """Specific angular momentum magnitude h = √(μ a (1 - e²))"""
        return np.sqrt(self.mu * self.a * (1 - self.e**2))

    # ========== STATE EVALUATION ==========
    def position_at(self, time, scale=1.0):
        """Cartesian position at ``time`` (see orrery.state.compute_position)"""
        from .state import compute_position
        return compute_position(self, time, scale)

    def state_at(self, time, scale=1.0):
        """Position and velocity at ``time`` (see orrery.state.compute_state)"""
        from .state import compute_state
        return compute_state(self, time, scale)

    # ========== UTILITY METHODS ==========
    def copy(self):
        """Create a deep copy of the orbital elements"""
        return OrbitalElements(self.elements.copy(), name=self._name,
                               validate=False)

    def replace(self, validate=True, **kwargs):
        """
        Return a new OrbitalElements with some values replaced.

        Examples
        --------
        >>> retro = orbit.replace(period=-orbit.period)
        """
        name = kwargs.pop('name', self._name)
        params = dict(zip(self.FIELDS, self.elements.tolist()))
        for key, value in kwargs.items():
            key = self._ALIASES.get(key, key)
            if key not in params:
                raise ValueError(f"Unknown orbital element '{key}'")
            params[key] = value
        return OrbitalElements(name=name, validate=validate, **params)

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.

        All methods accept a list of OrbitalElements and return
        a list of OrbitalElements or computed values.
        """
        @staticmethod
        def copy(orbits):
            """Copy multiple orbits"""
            return [o.copy() for o in orbits]

        @staticmethod
        def a(orbits):
            """Get semi-major axis for multiple orbits"""
            return np.array([o.a for o in orbits])

        @staticmethod
        def e(orbits):
            """Get eccentricity for multiple orbits"""
            return np.array([o.e for o in orbits])

        @staticmethod
        def period(orbits):
            """Get orbital periods for multiple orbits"""
            return np.array([o.period for o in orbits])

        @staticmethod
        def mean_motion(orbits):
            """Get mean motions for multiple orbits"""
            return np.array([o.mean_motion() for o in orbits])

        @staticmethod
        def positions(orbits, time, scale=1.0):
            """Positions of multiple orbits at one time, shape (n_orbits, 3)"""
            return np.array([o.position_at(time, scale) for o in orbits])

        @staticmethod
        def to_numpy(orbits):
            """
            Convert list of OrbitalElements to NumPy array.

            Returns
            -------
            np.ndarray
                Array of shape (n_orbits, 7) containing orbital elements
            """
            return np.array([o.elements for o in orbits])

        @staticmethod
        def to_dataframe(orbits, index=None):
            """
            Convert list of OrbitalElements to pandas DataFrame.

            Parameters
            ----------
            orbits : list of OrbitalElements
                List of orbital elements
            index : array-like, optional
                Index for the DataFrame. If None, body names are used when
                every orbit has one, otherwise an integer index.

            Returns
            -------
            pd.DataFrame
                DataFrame with columns a, period, e, i, w, omega, M0

            Raises
            ------
            ValueError
                If index length doesn't match number of orbits
            """
            import pandas as pd
            # check for empty list input and return empty DataFrame
            if not orbits:
                return pd.DataFrame(columns=list(OrbitalElements.FIELDS))

            if index is None:
                names = [o.name for o in orbits]
                if all(n is not None for n in names):
                    index = names
            elif len(index) != len(orbits):
                raise ValueError(
                    f"Index length ({len(index)}) must match "
                    f"number of orbits ({len(orbits)})"
                )

            data = np.array([o.elements for o in orbits])
            return pd.DataFrame(data, columns=list(OrbitalElements.FIELDS),
                                index=index)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        #Length of element vector (always 7)
        return 7

    def __getitem__(self, key):
        #Allow indexing like orbit[0]
        return self.elements[key]

    def __iter__(self):
        #Allow iteration over elements
        return iter(self.elements)

    def __repr__(self):
        #Machine-readable representation
        name = f", name={self._name!r}" if self._name else ""
        return f"OrbitalElements({self.elements.tolist()}{name})"

    def __str__(self):
        #Human-readable representation
        a, period, e, i, w, omega, M0 = self.elements
        header = f"Orbital Elements ({self._name}):" if self._name \
            else "Orbital Elements:"
        direction = " (retrograde)" if period < 0 else ""
        return (f"{header}\n"
                f"  a      = {a:12.4f}\n"
                f"  period = {period:12.4f}{direction}\n"
                f"  e      = {e:12.6f}\n"
                f"  i      = {np.degrees(i):12.4f}°\n"
                f"  ω      = {np.degrees(w):12.4f}°\n"
                f"  Ω      = {np.degrees(omega):12.4f}°\n"
                f"  M0     = {np.degrees(M0):12.4f}°")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return (self._name == other._name and
                np.allclose(self.elements, other.elements,
                            rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL))

    def __hash__(self):
        #Hash with rounding to match equality
        rounded = tuple(round(float(x), config.HASH_DECIMALS)
                        for x in self.elements)
        return hash((self._name, rounded))

    # ========== STATIC METHODS ==========
    @classmethod
    def _from_named_params(cls, kwargs):
        """
        Convert named parameters to a 7-element array.

        Returns
        -------
        elements : np.ndarray
            7-element array
        """
        params = dict(cls._DEFAULTS)
        for key, value in kwargs.items():
            field = cls._ALIASES.get(key, key)
            if field not in cls.FIELDS:
                raise ValueError(
                    f"Unknown orbital element '{key}'. "
                    f"Valid names: {list(cls.FIELDS) + list(cls._ALIASES)}")
            params[field] = value

        missing = [k for k in cls.FIELDS if k not in params]
        if missing:
            provided = list(kwargs.keys())
            raise ValueError(
                f"Missing orbital elements {missing} (got {provided})\n"
                f"Required: a, period, e, i; optional: w, omega, M0"
            )
        return np.array([params[k] for k in cls.FIELDS], dtype=float)
