"""
Orrery: Orbital Mechanics and Dynamical Analysis for a Planetary System

A Python package that turns orbital elements and a simulation time into
positions and velocities, and derives resonances, conjunctions/oppositions
and stability limits for the moons of a planet.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .catalog import Catalog
from .stability import BodyParams, StabilityResult

# Engine
from .kepler import solve_kepler, kepler_solution, KeplerSolution
from .state import (
    compute_position, compute_velocity, compute_velocity_vector,
    compute_state, predict_position, true_anomaly_at,
    StateVector, VelocityComponents,
)
from .events import (
    synodic_period, phase_angle, find_conjunctions_and_oppositions,
    EventSearchResult,
)
from .resonance import find_resonances, ResonanceRecord, COMMON_RESONANCES
from .stability import (
    roche_limit_rigid, roche_limit_fluid, hill_radius, check_stability,
    lagrange_points,
)
from .conversion import (
    state_vectors_to_elements, display_to_reference, ConvertedElements,
)

# Warning categories
from .utils import ConvergenceWarning, DegenerateOrbitWarning, CoarseSamplingWarning

# Uranian system defaults
from .defaults import URANUS, uranian_moons

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "Catalog",
    "BodyParams",
    "StabilityResult",
    "KeplerSolution",
    "StateVector",
    "VelocityComponents",
    "EventSearchResult",
    "ResonanceRecord",
    "ConvertedElements",
    # Abbreviations
    "OE",
    # Functions
    "solve_kepler",
    "kepler_solution",
    "compute_position",
    "compute_velocity",
    "compute_velocity_vector",
    "compute_state",
    "predict_position",
    "true_anomaly_at",
    "synodic_period",
    "phase_angle",
    "find_conjunctions_and_oppositions",
    "find_resonances",
    "roche_limit_rigid",
    "roche_limit_fluid",
    "hill_radius",
    "check_stability",
    "lagrange_points",
    "state_vectors_to_elements",
    "display_to_reference",
    # Constants
    "COMMON_RESONANCES",
    "URANUS",
    "uranian_moons",
    # Warnings
    "ConvergenceWarning",
    "DegenerateOrbitWarning",
    "CoarseSamplingWarning",
]
