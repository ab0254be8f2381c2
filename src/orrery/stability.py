'''Tidal and gravitational stability limits for moons of the primary
BodyParams and StabilityResult definitions'''

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .config import config

ROCHE_RIGID_COEFF = 2.456
ROCHE_FLUID_COEFF = 2.88


@dataclass(frozen=True)
class BodyParams:
    """
    Immutable physical parameters for a planet or moon.

    Attributes
    ----------
    mass : float
        Mass [kg]
    radius : float
        Mean radius [km]
    density : float
        Mean density [g/cm³]; only density ratios are used
    name : str, optional
        Body identifier
    """
    mass: float
    radius: float
    density: float
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")
        if self.density <= 0:
            raise ValueError(f"Density must be positive, got {self.density}")


@dataclass(frozen=True)
class StabilityResult:
    """
    Stability verdict for a moon plus every intermediate value.

    Attributes
    ----------
    is_stable : bool
        distance > roche_limit and hill_radius >= 3 * moon radius
    hill_radius : float
    roche_limit_rigid : float
    roche_limit_fluid : float
    stability_factor : float
        hill_radius / moon radius
    roche_limit : float
        The Roche limit the verdict was checked against
    distance : float
        Orbital distance of the moon
    """
    is_stable: bool
    hill_radius: float
    roche_limit_rigid: float
    roche_limit_fluid: float
    stability_factor: float
    roche_limit: float
    distance: float

    def __str__(self):
        verdict = "stable" if self.is_stable else "UNSTABLE"
        return (f"Stability: {verdict}\n"
                f"  distance          = {self.distance:12.4f}\n"
                f"  Roche limit (rig) = {self.roche_limit_rigid:12.4f}\n"
                f"  Roche limit (fl)  = {self.roche_limit_fluid:12.4f}\n"
                f"  Hill radius       = {self.hill_radius:12.4f}\n"
                f"  stability factor  = {self.stability_factor:12.4f}")


def roche_limit_rigid(planet_radius, planet_density, moon_density):
    """Rigid-body Roche limit: d = 2.456 R (ρ_planet / ρ_moon)^(1/3)"""
    return ROCHE_RIGID_COEFF * planet_radius * np.cbrt(planet_density / moon_density)


def roche_limit_fluid(planet_radius, planet_density, moon_density):
    """Fluid-body Roche limit: d = 2.88 R (ρ_planet / ρ_moon)^(1/3)"""
    return ROCHE_FLUID_COEFF * planet_radius * np.cbrt(planet_density / moon_density)


def hill_radius(moon_mass, moon_distance, planet_mass):
    """Hill radius: r_H = d (m_moon / 3 M_planet)^(1/3)"""
    return moon_distance * np.cbrt(moon_mass / (3 * planet_mass))


def check_stability(moon: BodyParams, distance: float, primary: BodyParams,
                    roche: str = 'rigid') -> StabilityResult:
    """
    Decide whether a moon at ``distance`` survives tides and holds its Hill sphere.

    Both criteria must hold:

    - distance > Roche limit (rigid by default, ``roche='fluid'`` for fluid)
    - Hill radius >= config.STABILITY_HILL_FACTOR * moon radius; the
      boundary itself counts as stable (compared within config.EQUALITY_RTOL)

    Parameters
    ----------
    moon : BodyParams
        The satellite
    distance : float
        Orbital distance from the primary, in the unit of the radii
    primary : BodyParams
        The planet
    roche : {'rigid', 'fluid'}
        Which Roche limit to test against

    Returns
    -------
    StabilityResult
    """
    rigid = float(roche_limit_rigid(primary.radius, primary.density, moon.density))
    fluid = float(roche_limit_fluid(primary.radius, primary.density, moon.density))
    if roche == 'rigid':
        limit = rigid
    elif roche == 'fluid':
        limit = fluid
    else:
        raise ValueError(f"Unknown Roche limit '{roche}'. Use 'rigid' or 'fluid'")

    r_hill = float(hill_radius(moon.mass, distance, primary.mass))
    required = config.STABILITY_HILL_FACTOR * moon.radius
    holds_hill_sphere = (r_hill > required or
                         np.isclose(r_hill, required, rtol=config.EQUALITY_RTOL,
                                    atol=0.0))

    return StabilityResult(
        is_stable=bool(distance > limit and holds_hill_sphere),
        hill_radius=r_hill,
        roche_limit_rigid=rigid,
        roche_limit_fluid=fluid,
        stability_factor=r_hill / moon.radius,
        roche_limit=limit,
        distance=float(distance),
    )


def lagrange_points(moon_mass, primary_mass, distance) -> Dict[str, np.ndarray]:
    """
    Approximate Lagrange points of a primary-moon pair.

    Positions are in the moon's orbital plane, with the primary at the origin
    and the moon on the +x axis at ``distance``:

    - L1, L2 at a(1 ∓ (μ/3)^(1/3)) on the x axis
    - L3 at -a(1 + 5μ/12)
    - L4, L5 at ±60° from the moon on its orbit

    with μ = m / (m + M).

    Returns
    -------
    dict
        'L1' ... 'L5' -> np.ndarray [x, y]
    """
    mu = moon_mass / (moon_mass + primary_mass)
    a = distance
    hill = np.cbrt(mu / 3)
    return {
        'L1': np.array([a * (1 - hill), 0.0]),
        'L2': np.array([a * (1 + hill), 0.0]),
        'L3': np.array([-a * (1 + 5 * mu / 12), 0.0]),
        'L4': np.array([a * np.cos(np.pi / 3), a * np.sin(np.pi / 3)]),
        'L5': np.array([a * np.cos(np.pi / 3), -a * np.sin(np.pi / 3)]),
    }
