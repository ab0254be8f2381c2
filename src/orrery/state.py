'''Position and velocity of a body from its orbital elements and a simulation time

Positions are returned in the display frame used by the scene layer: the
reference plane is X-Z and Y points along the reference-plane normal.
'''

from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from .kepler import solve_kepler, true_anomaly_from_eccentric
from .orbital_elements import OrbitalElements


class VelocityComponents(NamedTuple):
    """Orbital speed split into radial and tangential parts."""
    magnitude: float
    radial: float
    tangential: float


@dataclass(frozen=True)
class StateVector:
    """
    Cartesian state of a body at one instant.

    Computed on demand and never cached by the engine.
    """
    position: np.ndarray
    velocity: Optional[np.ndarray] = None

    def __repr__(self):
        vel = None if self.velocity is None else self.velocity.tolist()
        return f"StateVector(position={self.position.tolist()}, velocity={vel})"


def orient(x, y, i, w, omega):
    """
    Rotate an orbital-plane vector (x, y) into the display frame.

    Rotates by the argument of periapsis in the orbital plane, tilts by the
    inclination and rotates the node line by the ascending node longitude.

    Returns
    -------
    np.ndarray
        3-vector [X, Y, Z]
    """
    cos_i, sin_i = np.cos(i), np.sin(i)
    cos_w, sin_w = np.cos(w), np.sin(w)
    cos_o, sin_o = np.cos(omega), np.sin(omega)

    # periapsis rotation in the orbital plane
    x_node = x * cos_w - y * sin_w
    y_node = x * sin_w + y * cos_w

    # node-line component and its perpendicular, then node rotation
    return np.array([
        x_node * cos_o - y_node * cos_i * sin_o,
        y_node * sin_i,
        x_node * sin_o + y_node * cos_i * cos_o,
    ])


def true_anomaly_at(elements: OrbitalElements, time: float) -> float:
    """True anomaly of the body at ``time`` [rad]."""
    M = elements.mean_anomaly(time)
    E = solve_kepler(M, elements.e)
    return true_anomaly_from_eccentric(E, elements.e)


def orbital_radius(elements: OrbitalElements, true_anomaly: float) -> float:
    """Distance from the focus at true anomaly ν: a(1 - e²)/(1 + e cos ν)"""
    e = elements.e
    return float(elements.a * (1 - e**2) / (1 + e * np.cos(true_anomaly)))


def compute_position(elements: OrbitalElements, time: float,
                     scale: float = 1.0) -> np.ndarray:
    """
    Cartesian position of a body at simulation time ``time``.

    Parameters
    ----------
    elements : OrbitalElements
        Orbit of the body
    time : float
        Simulation time, in the same unit as the orbital period
    scale : float, optional
        Display/distance scale factor applied to the result (default 1)

    Returns
    -------
    np.ndarray
        Position [X, Y, Z] in the display frame
    """
    nu = true_anomaly_at(elements, time)
    r = orbital_radius(elements, nu)
    position = orient(r * np.cos(nu), r * np.sin(nu),
                      elements.i, elements.w, elements.omega)
    return position * scale


def predict_position(elements: OrbitalElements, current_time: float,
                     future_time: float, scale: float = 1.0) -> np.ndarray:
    """
    Position at ``future_time``.

    Closed-form propagation needs no history, so ``current_time`` only
    documents intent at the call site.
    """
    return compute_position(elements, future_time, scale)


def compute_velocity(elements: OrbitalElements,
                     true_anomaly: float) -> VelocityComponents:
    """
    Orbital speed at true anomaly ν from the vis-viva relation.

    μ is derived from a and period through Kepler's third law, since the
    catalog works in scaled, non-physical distance units.

    Returns
    -------
    VelocityComponents
        magnitude √(μ(2/r - 1/a)), radial (μ/h)·e·sin ν and tangential h/r,
        with h = √(μ a (1 - e²))
    """
    a, e = elements.a, elements.e
    mu = elements.mu
    r = orbital_radius(elements, true_anomaly)

    v = np.sqrt(mu * (2 / r - 1 / a))
    h = np.sqrt(mu * a * (1 - e**2))
    v_radial = (mu / h) * e * np.sin(true_anomaly)
    v_tangential = h / r

    return VelocityComponents(float(v), float(v_radial), float(v_tangential))


def compute_velocity_vector(elements: OrbitalElements, time: float,
                            scale: float = 1.0) -> np.ndarray:
    """
    Cartesian velocity at ``time`` in the display frame.

    Perifocal velocity (μ/h)(-sin ν, e + cos ν), reversed for retrograde
    bodies, rotated with the same orientation as the position.
    """
    e = elements.e
    nu = true_anomaly_at(elements, time)
    mu = elements.mu
    h = np.sqrt(mu * elements.a * (1 - e**2))
    # direction of motion follows the sign of the period
    k = np.sign(elements.period) * mu / h
    velocity = orient(-k * np.sin(nu), k * (e + np.cos(nu)),
                      elements.i, elements.w, elements.omega)
    return velocity * scale


def compute_state(elements: OrbitalElements, time: float,
                  scale: float = 1.0) -> StateVector:
    """Position and velocity at ``time`` as a StateVector."""
    return StateVector(compute_position(elements, time, scale),
                       compute_velocity_vector(elements, time, scale))
