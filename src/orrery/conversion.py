'''Recover orbital elements from a Cartesian state vector'''

import warnings
from dataclasses import dataclass

import numpy as np

from .config import config
from .kepler import mean_from_true
from .orbital_elements import OrbitalElements
from .utils import DegenerateOrbitWarning, TWO_PI, clamped_arccos


def display_to_reference(vec) -> np.ndarray:
    """
    Map a display-frame vector (Y along the reference-plane normal) into the
    reference frame used here (Z along the normal) by swapping Y and Z.
    """
    vec = np.asarray(vec, dtype=float)
    return np.array([vec[0], vec[2], vec[1]])


@dataclass(frozen=True)
class ConvertedElements:
    """
    Keplerian elements recovered from a state vector.

    Attributes
    ----------
    a : float
        Semi-major axis (negative for unbound orbits, inf for parabolic)
    e : float
        Eccentricity
    i : float
        Inclination [rad]
    omega : float
        Longitude of the ascending node [rad]
    w : float
        Argument of periapsis [rad]
    nu : float
        True anomaly [rad]
    mu : float
        Gravitational parameter used for the conversion
    circular : bool
        e below config.SNAP_TO_CIRCULAR; w is undefined and set to 0, nu is
        then measured from the ascending node (or the x axis if also
        equatorial)
    equatorial : bool
        Node vector below config.SNAP_TO_EQUATORIAL; omega is undefined and
        set to 0, w is then measured from the x axis
    """
    a: float
    e: float
    i: float
    omega: float
    w: float
    nu: float
    mu: float
    circular: bool = False
    equatorial: bool = False

    @property
    def ill_defined(self) -> bool:
        """True if any angle was fixed by convention rather than geometry"""
        return self.circular or self.equatorial

    def to_orbital_elements(self, time: float = 0.0, name=None) -> OrbitalElements:
        """
        OrbitalElements reproducing this state at simulation time ``time``.

        The period follows from μ and a, and the epoch mean anomaly is chosen
        so the body is at ``nu`` at ``time``.

        Raises
        ------
        ValueError
            If the orbit is not closed (e >= 1)
        """
        if not (self.e < 1 and self.a > 0):
            raise ValueError(
                f"Only closed orbits map to OrbitalElements (e={self.e}, a={self.a})")
        period = TWO_PI * np.sqrt(self.a**3 / self.mu)
        M = mean_from_true(self.nu, self.e)
        M0 = np.mod(M - TWO_PI / period * time, TWO_PI)
        return OrbitalElements(a=self.a, period=period, e=self.e, i=self.i,
                               w=self.w, omega=self.omega, M0=M0, name=name)


def state_vectors_to_elements(position, velocity, mu: float) -> ConvertedElements:
    """
    Convert a Cartesian state into Keplerian elements.

    The reference frame has its z axis along the reference-plane normal; use
    :func:`display_to_reference` first for vectors from orrery.state.

    Parameters
    ----------
    position : array-like
        Position vector [x, y, z]
    velocity : array-like
        Velocity vector [vx, vy, vz]
    mu : float
        Gravitational parameter, in units consistent with the state

    Returns
    -------
    ConvertedElements
        Elements with ``circular``/``equatorial`` flags. A
        DegenerateOrbitWarning is issued when either flag is set.

    Notes
    -----
    Every arccos argument is clamped to [-1, 1], so round-off near the
    degenerate cases never produces NaN.
    """
    rvec = np.asarray(position, dtype=float)
    vvec = np.asarray(velocity, dtype=float)
    r = np.linalg.norm(rvec)
    v = np.linalg.norm(vvec)
    if r == 0:
        raise ValueError("Position vector must be non-zero")

    # semi-major axis from specific orbital energy
    energy = v**2 / 2 - mu / r
    a = -mu / (2 * energy) if energy != 0 else np.inf

    # angular momentum and eccentricity vector
    hvec = np.cross(rvec, vvec)
    h = np.linalg.norm(hvec)
    if h == 0:
        raise ValueError("Position and velocity are parallel; orbit plane undefined")
    evec = np.cross(vvec, hvec) / mu - rvec / r
    e = np.linalg.norm(evec)

    i = clamped_arccos(hvec[2] / h)

    # node vector n = z × h
    nvec = np.array([-hvec[1], hvec[0], 0.0])
    n = np.linalg.norm(nvec)

    circular = e < config.SNAP_TO_CIRCULAR
    equatorial = n / h < config.SNAP_TO_EQUATORIAL
    # retrograde equatorial orbits have h pointing down the z axis
    sense = 1.0 if hvec[2] >= 0 else -1.0

    if equatorial:
        omega = 0.0
    else:
        omega = clamped_arccos(nvec[0] / n)
        if nvec[1] < 0:
            omega = TWO_PI - omega

    if circular:
        w = 0.0
    elif equatorial:
        # longitude of periapsis, measured from the x axis
        w = np.arctan2(sense * evec[1], evec[0]) % TWO_PI
    else:
        w = clamped_arccos(np.dot(nvec, evec) / (n * e))
        if evec[2] < 0:
            w = TWO_PI - w

    if not circular:
        nu = clamped_arccos(np.dot(evec, rvec) / (e * r))
        if np.dot(rvec, vvec) < 0:
            nu = TWO_PI - nu
    elif not equatorial:
        # argument of latitude
        nu = clamped_arccos(np.dot(nvec, rvec) / (n * r))
        if rvec[2] < 0:
            nu = TWO_PI - nu
    else:
        # true longitude
        nu = np.arctan2(sense * rvec[1], rvec[0]) % TWO_PI

    if circular or equatorial:
        kind = " and ".join(k for k, flag in (("circular", circular),
                                               ("equatorial", equatorial)) if flag)
        warnings.warn(
            f"Orbit is {kind}; undefined angles were set by convention",
            DegenerateOrbitWarning,
            stacklevel=2
        )

    return ConvertedElements(a=float(a), e=float(e), i=float(i),
                             omega=float(omega), w=float(w), nu=float(nu),
                             mu=float(mu), circular=bool(circular),
                             equatorial=bool(equatorial))
