'''Mean-motion resonance detection between pairs of orbiting bodies'''

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .config import config
from .orbital_elements import OrbitalElements

# (q, p): body B completes q orbits while body A completes p, i.e.
# period_B / period_A = p / q
COMMON_RESONANCES: Tuple[Tuple[int, int], ...] = (
    (1, 2), (2, 3), (3, 4), (3, 5), (4, 5), (5, 6)
)

_ORDER_NAMES = {1: 'first-order', 2: 'second-order', 3: 'third-order'}


@dataclass(frozen=True)
class ResonanceRecord:
    """
    A pair of bodies whose period ratio lies close to a low-order
    commensurability.

    Attributes
    ----------
    body_a, body_b : str
        Identifiers of the inner-loop pair (A before B in discovery order)
    ratio : str
        Commensurability as "q:p"
    q, p : int
        Integers of the commensurability, period_B / period_A ≈ p / q
    strength : float
        1 / |period ratio - p/q|; higher means closer to exact
    classification : str
        Resonance type tag
    order : int
        p - q
    offset : float
        |period ratio - p/q|
    """
    body_a: str
    body_b: str
    ratio: str
    q: int
    p: int
    strength: float
    classification: str = 'mean-motion'
    order: int = 1
    offset: float = 0.0

    def __str__(self):
        return (f"{self.body_a}-{self.body_b} {self.ratio} "
                f"({self.order_name} {self.classification}, "
                f"strength {self.strength:.4g})")

    @property
    def order_name(self):
        """'first-order', 'second-order', ... for the resonance order"""
        return _ORDER_NAMES.get(self.order, f"order-{self.order}")


def resonance_strength(ratio: float, q: int, p: int) -> float:
    """
    Closeness of a period ratio to the commensurability p/q.

    Offsets smaller than config.RESONANCE_MIN_OFFSET are scored at that
    floor, so an exact commensurability has a large but finite strength.
    """
    offset = abs(ratio - p / q)
    return 1.0 / max(offset, config.RESONANCE_MIN_OFFSET)


def classify_resonance(q: int, p: int) -> str:
    """
    Resonance type tag for a period commensurability q:p.

    Period commensurabilities are mean-motion resonances; their order
    (p - q) is reported separately on the record.
    """
    if q <= 0 or p <= 0:
        raise ValueError(f"Commensurability integers must be positive, got {q}:{p}")
    return 'mean-motion'


def _named_bodies(bodies) -> List[Tuple[str, OrbitalElements]]:
    """Normalize a mapping or sequence of elements into (name, elements) pairs."""
    if isinstance(bodies, Mapping):
        return [(str(name), elems) for name, elems in bodies.items()]
    return [(elems.name if elems.name is not None else str(index), elems)
            for index, elems in enumerate(bodies)]


def find_resonances(bodies: Union[Mapping[str, OrbitalElements],
                                  Sequence[OrbitalElements]],
                    tolerance: Optional[float] = None) -> List[ResonanceRecord]:
    """
    Find pairs of bodies near a canonical low-order commensurability.

    For every unordered pair (A at index i, B at index j > i) the period
    ratio |period_B| / |period_A| is compared against COMMON_RESONANCES; each
    entry within ``tolerance`` produces a record, so one pair can yield more
    than one. Records come out in discovery order (outer loop over A, inner
    over B, then table order).

    Parameters
    ----------
    bodies : mapping of name -> OrbitalElements, or sequence of OrbitalElements
        Sequence entries are named by ``elements.name`` or their index
    tolerance : float, optional
        Absolute tolerance on |ratio - p/q| (default: config.RESONANCE_TOL)

    Returns
    -------
    list of ResonanceRecord
    """
    tolerance = config.RESONANCE_TOL if tolerance is None else tolerance
    named = _named_bodies(bodies)

    records = []
    for index_a, (name_a, elems_a) in enumerate(named):
        for name_b, elems_b in named[index_a + 1:]:
            # commensurability depends on period magnitudes, not direction
            ratio = abs(elems_b.period) / abs(elems_a.period)
            for q, p in COMMON_RESONANCES:
                offset = abs(ratio - p / q)
                if offset < tolerance:
                    records.append(ResonanceRecord(
                        body_a=name_a,
                        body_b=name_b,
                        ratio=f"{q}:{p}",
                        q=q,
                        p=p,
                        strength=resonance_strength(ratio, q, p),
                        classification=classify_resonance(q, p),
                        order=p - q,
                        offset=float(offset),
                    ))
    return records


def resonances_to_dataframe(records: Sequence[ResonanceRecord]):
    """Table of resonance records, one row per record in discovery order."""
    import pandas as pd
    columns = ['body_a', 'body_b', 'ratio', 'q', 'p', 'strength',
               'classification', 'order', 'offset']
    return pd.DataFrame([[getattr(r, c) for c in columns] for r in records],
                        columns=columns)
