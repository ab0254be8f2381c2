"""
Default Bodies and Catalogs
===========================

Physical parameters for Uranus and its five major moons, their orbital
elements, and factory functions that build a Catalog from them.

Units: distances in km, periods in hours, masses in kg, densities in g/cm³.
The scene layer converts km to display units with its own scale factor, e.g.
``catalog.positions(t, scale=DISPLAY_SCALE)``.

Examples
--------
>>> from orrery.defaults import uranian_moons
>>> moons = uranian_moons(seed=42)   # reproducible starting phases
>>> moons.positions(12.0)['Ariel']
"""
from typing import Dict, Optional

import numpy as np

from .catalog import Catalog
from .orbital_elements import OrbitalElements
from .stability import BodyParams, StabilityResult, check_stability

"""
Physical parameters of the Uranian system
"""
URANUS = BodyParams(mass=8.681e25, radius=25559.0, density=1.27, name='Uranus')

MIRANDA = BodyParams(mass=6.59e19, radius=235.8, density=1.20, name='Miranda')
ARIEL = BodyParams(mass=1.353e21, radius=578.9, density=1.66, name='Ariel')
UMBRIEL = BodyParams(mass=1.172e21, radius=584.7, density=1.39, name='Umbriel')
TITANIA = BodyParams(mass=3.527e21, radius=788.9, density=1.71, name='Titania')
OBERON = BodyParams(mass=3.014e21, radius=761.4, density=1.63, name='Oberon')

MAJOR_MOONS = (MIRANDA, ARIEL, UMBRIEL, TITANIA, OBERON)

# scene units per km: the planet is drawn with radius 10
DISPLAY_SCALE = 10.0 / URANUS.radius

"""
Orbital elements of the major moons, relative to Uranus' equator
name: (a [km], period [h], e, i [deg])
"""
URANIAN_MOON_ELEMENTS = {
    'Miranda': (129900.0, 33.923, 0.0013, 4.34),
    'Ariel': (190900.0, 60.489, 0.0012, 0.04),
    'Umbriel': (266000.0, 99.460, 0.0039, 0.13),
    'Titania': (436300.0, 208.941, 0.0011, 0.08),
    'Oberon': (583500.0, 323.118, 0.0014, 0.07),
}


def uranian_moons(seed: Optional[int] = None,
                  randomize_phase: bool = True) -> Catalog:
    """
    Catalog of the five major Uranian moons.

    Parameters
    ----------
    seed : int, optional
        Seed for the starting mean anomalies. The same seed always yields
        the same catalog; None draws fresh entropy.
    randomize_phase : bool, optional
        If False, every moon starts at periapsis (M0 = 0) and ``seed`` is
        ignored.

    Returns
    -------
    Catalog
    """
    rng = np.random.default_rng(seed)
    bodies = []
    for name, (a, period, e, inc_deg) in URANIAN_MOON_ELEMENTS.items():
        M0 = rng.uniform(0.0, 2 * np.pi) if randomize_phase else 0.0
        bodies.append(OrbitalElements(a=a, period=period, e=e,
                                      i=np.radians(inc_deg), M0=M0, name=name))
    return Catalog(bodies)


def uranian_moon_stability(roche: str = 'rigid') -> Dict[str, StabilityResult]:
    """Stability verdict for each major moon at its mean orbital distance."""
    return {moon.name: check_stability(moon, URANIAN_MOON_ELEMENTS[moon.name][0],
                                       URANUS, roche=roche)
            for moon in MAJOR_MOONS}
