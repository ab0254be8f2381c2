'''Kepler's equation and anomaly conversions for closed (elliptic) orbits'''

import warnings
from typing import NamedTuple, Optional

import numpy as np

from .config import config
from .utils import ConvergenceWarning, wrap_to_pi


class KeplerSolution(NamedTuple):
    """Result of a Newton-Raphson solve of Kepler's equation."""
    E: float
    iterations: int
    converged: bool


def kepler_solution(M: float, e: float, tol: Optional[float] = None,
                    max_iter: Optional[int] = None) -> KeplerSolution:
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly.

    Newton-Raphson iteration, stopped when the step falls below ``tol`` or
    after ``max_iter`` steps. Hitting the cap is not an error: the last
    iterate is returned with ``converged=False``.

    Parameters
    ----------
    M : float
        Mean anomaly [rad], any real value
    e : float
        Eccentricity, 0 <= e < 1
    tol : float, optional
        Absolute tolerance on |ΔE| (default: config.KEPLER_TOL)
    max_iter : int, optional
        Iteration cap (default: config.KEPLER_MAX_ITER)

    Returns
    -------
    KeplerSolution
        (E, iterations, converged)

    Notes
    -----
    M is reduced to (-π, π] before iterating and the removed multiple of 2π
    is added back, so E is consistent with the M that was passed in.
    The starting guess is E0 = M; for e >= 0.8 the start moves to ±π, where
    the iteration converges monotonically even for nearly parabolic orbits.
    """
    tol = config.KEPLER_TOL if tol is None else tol
    max_iter = config.KEPLER_MAX_ITER if max_iter is None else max_iter

    M = float(M)
    M_reduced = wrap_to_pi(M)
    offset = M - M_reduced

    if e < 0.8:
        E = M_reduced
    else:
        E = np.pi if M_reduced >= 0 else -np.pi

    iterations = 0
    converged = False
    while iterations < max_iter:
        delta = (E - e * np.sin(E) - M_reduced) / (1.0 - e * np.cos(E))
        E -= delta
        iterations += 1
        if abs(delta) < tol:
            converged = True
            break

    return KeplerSolution(float(E + offset), iterations, converged)


def solve_kepler(M: float, e: float, tol: Optional[float] = None,
                 max_iter: Optional[int] = None) -> float:
    """
    Eccentric anomaly for mean anomaly ``M`` and eccentricity ``e``.

    Thin wrapper around :func:`kepler_solution` that returns only E and
    issues a :class:`ConvergenceWarning` when the iteration cap is reached.
    """
    solution = kepler_solution(M, e, tol=tol, max_iter=max_iter)
    if not solution.converged:
        warnings.warn(
            f"Kepler solver did not converge in {solution.iterations} "
            f"iterations (M={M}, e={e}); returning best estimate",
            ConvergenceWarning,
            stacklevel=2
        )
    return solution.E


def true_anomaly_from_eccentric(E: float, e: float) -> float:
    """True anomaly ν from eccentric anomaly E, in (-π, π]."""
    return float(2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(E / 2.0),
                                  np.sqrt(1.0 - e) * np.cos(E / 2.0)))


def eccentric_from_true(nu: float, e: float) -> float:
    """Eccentric anomaly E from true anomaly ν, in (-π, π]."""
    return float(2.0 * np.arctan2(np.sqrt(1.0 - e) * np.sin(nu / 2.0),
                                  np.sqrt(1.0 + e) * np.cos(nu / 2.0)))


def mean_from_true(nu: float, e: float) -> float:
    """Mean anomaly M from true anomaly ν, in (-π, π]."""
    E = eccentric_from_true(nu, e)
    return float(E - e * np.sin(E))


def true_anomaly_from_mean(M: float, e: float) -> float:
    """True anomaly ν from mean anomaly M (solves Kepler's equation)."""
    return true_anomaly_from_eccentric(solve_kepler(M, e), e)
