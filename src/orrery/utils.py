"""
Utility functions, angle helpers and warning categories for the Orrery package.
"""

import warnings
from typing import Type

import numpy as np

from .config import config

TWO_PI = 2.0 * np.pi


class ConvergenceWarning(RuntimeWarning):
    """Kepler solver hit its iteration cap; result is a best estimate."""


class DegenerateOrbitWarning(RuntimeWarning):
    """Orbital angles are undefined for a circular and/or equatorial orbit."""


class CoarseSamplingWarning(RuntimeWarning):
    """Event search step is too coarse to resolve every event."""


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from orrery.utils import validation_error
    >>> from orrery import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)


def wrap_to_2pi(angle):
    """Normalize an angle (or array of angles) into [0, 2π)."""
    wrapped = np.mod(angle, TWO_PI)
    # np.mod can return exactly 2π for tiny negative inputs
    if np.ndim(wrapped):
        wrapped[wrapped >= TWO_PI] = 0.0
        return wrapped
    return 0.0 if wrapped >= TWO_PI else float(wrapped)


def wrap_to_pi(angle):
    """Normalize an angle into (-π, π]."""
    wrapped = np.pi - np.mod(np.pi - angle, TWO_PI)
    return wrapped if np.ndim(wrapped) else float(wrapped)


def clamped_arccos(x) -> float:
    """arccos with its argument clamped to [-1, 1] against round-off overshoot."""
    return float(np.arccos(np.clip(x, -1.0, 1.0)))
