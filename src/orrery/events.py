'''Synodic periods, phase angles and conjunction/opposition search for body pairs'''

import math
import warnings
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import config
from .orbital_elements import OrbitalElements
from .state import compute_position
from .utils import CoarseSamplingWarning, TWO_PI, wrap_to_2pi, wrap_to_pi


def synodic_period(period1: float, period2: float) -> float:
    """
    Time between successive conjunctions of two bodies.

    |1 / (1/p1 - 1/p2)|, or ``inf`` when the periods are equal (the bodies
    never change their relative phase).
    """
    if period1 == period2:
        return math.inf
    return abs(1.0 / (1.0 / period1 - 1.0 / period2))


def phase_angle(elements_a: OrbitalElements, elements_b: OrbitalElements,
                time: float) -> float:
    """
    Angle from body A to body B around the reference-plane normal.

    Both positions are projected onto the reference plane (atan2(z, x)) and
    the difference is normalized into [0, 2π). Values within
    config.SNAP_TO_ZERO_THRESHOLD of 0 or 2π are returned as exactly 0.
    """
    pos_a = compute_position(elements_a, time)
    pos_b = compute_position(elements_b, time)

    angle_a = np.arctan2(pos_a[2], pos_a[0])
    angle_b = np.arctan2(pos_b[2], pos_b[0])

    phase = wrap_to_2pi(angle_b - angle_a)
    threshold = config.SNAP_TO_ZERO_THRESHOLD
    if phase < threshold or TWO_PI - phase < threshold:
        return 0.0
    return phase


@dataclass
class EventSearchResult:
    """
    Conjunction and opposition times found by a fixed-step phase scan.

    Attributes
    ----------
    conjunctions : list of float
        Sample times at which the phase angle reached or passed 0
    oppositions : list of float
        Sample times at which the phase angle reached or passed π
    step_size : float
        Scan step; each reported time lags the true event by at most this
    synodic_period : float
        Synodic period of the pair (inf for equal periods)
    undersampled : bool
        True if the synodic period spans too few steps for every event to be
        resolved (see config.MIN_STEPS_PER_SYNODIC)
    """
    conjunctions: List[float] = field(default_factory=list)
    oppositions: List[float] = field(default_factory=list)
    step_size: float = 0.0
    synodic_period: float = math.inf
    undersampled: bool = False

    def to_dataframe(self):
        """One row per event with columns ``time`` and ``event``, sorted by time."""
        import pandas as pd
        rows = ([(t, 'conjunction') for t in self.conjunctions] +
                [(t, 'opposition') for t in self.oppositions])
        df = pd.DataFrame(rows, columns=['time', 'event'])
        return df.sort_values('time', kind='stable').reset_index(drop=True)

    def __str__(self):
        return (f"EventSearchResult: {len(self.conjunctions)} conjunctions, "
                f"{len(self.oppositions)} oppositions "
                f"(step={self.step_size}, synodic period={self.synodic_period:.6g}"
                f"{', undersampled' if self.undersampled else ''})")


def _unwrap(last: float, phase: float) -> float:
    """Express ``phase`` within π of ``last`` by adding a multiple of 2π."""
    change = wrap_to_pi(phase - last)
    return phase + TWO_PI * round((last + change - phase) / TWO_PI)


def _crosses(last: float, current: float, level: float) -> bool:
    """
    True if moving from ``last`` to ``current`` reaches or passes ``level``
    (mod 2π). The starting point itself does not count as a crossing.
    """
    if current > last:
        # smallest level + 2πk strictly above last
        k = math.floor((last - level) / TWO_PI) + 1
        return level + k * TWO_PI <= current
    if current < last:
        # largest level + 2πk strictly below last
        k = math.ceil((last - level) / TWO_PI) - 1
        return level + k * TWO_PI >= current
    return False


def find_conjunctions_and_oppositions(elements_a: OrbitalElements,
                                      elements_b: OrbitalElements,
                                      start_time: float, end_time: float,
                                      step_size: Optional[float] = None
                                      ) -> EventSearchResult:
    """
    Scan [start_time, end_time] for conjunctions and oppositions of two bodies.

    The phase angle (see :func:`phase_angle`) is sampled at
    ``start_time + k*step_size``, plus ``end_time`` itself when the window is
    not a whole number of steps. Between consecutive samples the phase
    change is taken the short way round, and an event is recorded at the
    first sample on or past the crossing: phase 0 for a conjunction, phase π
    for an opposition. Each crossing is counted once, in whichever direction
    the relative phase is moving.

    This is a coarse zero-crossing detector, not a root finder: reported
    times lag the true event by up to ``step_size``, and events closer
    together than a few steps can be missed. When the synodic period spans
    fewer than config.MIN_STEPS_PER_SYNODIC steps a CoarseSamplingWarning is
    issued and the result is flagged ``undersampled``.

    Parameters
    ----------
    elements_a, elements_b : OrbitalElements
        The two bodies
    start_time, end_time : float
        Search window (inclusive)
    step_size : float, optional
        Sampling step (default: config.DEFAULT_EVENT_STEP)

    Returns
    -------
    EventSearchResult

    Raises
    ------
    ValueError
        If step_size is not positive or end_time < start_time
    """
    step = config.DEFAULT_EVENT_STEP if step_size is None else float(step_size)
    if not step > 0:
        raise ValueError(f"step_size must be positive, got {step_size}")
    if end_time < start_time:
        raise ValueError(
            f"end_time ({end_time}) must not precede start_time ({start_time})")

    synodic = synodic_period(elements_a.period, elements_b.period)
    undersampled = synodic < config.MIN_STEPS_PER_SYNODIC * step
    if undersampled:
        warnings.warn(
            f"Synodic period {synodic:.6g} spans fewer than "
            f"{config.MIN_STEPS_PER_SYNODIC} steps of {step}; "
            f"conjunctions and oppositions may be missed",
            CoarseSamplingWarning,
            stacklevel=2
        )

    result = EventSearchResult(step_size=step, synodic_period=synodic,
                               undersampled=undersampled)

    # sample on a fixed grid to avoid accumulating round-off in the time
    n_steps = int(math.floor((end_time - start_time) / step + 1e-9))
    times = [start_time + k * step for k in range(1, n_steps + 1)]
    # final partial step
    if end_time - (start_time + n_steps * step) > 1e-9 * step:
        times.append(end_time)

    last_phase = phase_angle(elements_a, elements_b, start_time)
    for time in times:
        phase = phase_angle(elements_a, elements_b, time)
        current = _unwrap(last_phase, phase)

        if _crosses(last_phase, current, 0.0):
            result.conjunctions.append(time)
        if _crosses(last_phase, current, np.pi):
            result.oppositions.append(time)

        last_phase = phase

    return result
