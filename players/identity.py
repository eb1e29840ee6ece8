from __future__ import annotations

"""Name and face generation.

The real name tables and face renderer are external data; the core only
needs something satisfying ``IdentityService``. ``DefaultIdentityService``
draws from small cumulative-frequency tables so the generator works without
them (dev fallback).

Names are picked like a census table: draw ``uniform(0, total)`` and take the
first entry whose cumulative frequency reaches the draw.
"""

from itertools import accumulate
from typing import Any, Dict, List, Protocol, Sequence, Tuple

from random_source import RandomSource


class IdentityService(Protocol):
    def name(self, nationality: str, *, rng: RandomSource) -> str: ...

    def face(self, *, rng: RandomSource) -> Dict[str, Any]: ...


# ----------------------------
# Fallback name bank (dev only)
# ----------------------------

# (name, relative frequency)
_FALLBACK_FIRST_NAMES: Sequence[Tuple[str, float]] = (
    ("James", 3.32), ("John", 3.27), ("Robert", 3.14), ("Michael", 2.63), ("William", 2.45),
    ("David", 2.36), ("Richard", 1.70), ("Charles", 1.52), ("Joseph", 1.40), ("Thomas", 1.38),
    ("Christopher", 1.04), ("Daniel", 0.97), ("Paul", 0.95), ("Mark", 0.94), ("Donald", 0.93),
    ("George", 0.93), ("Kenneth", 0.83), ("Steven", 0.78), ("Edward", 0.78), ("Brian", 0.74),
    ("Ronald", 0.73), ("Anthony", 0.72), ("Kevin", 0.67), ("Jason", 0.66), ("Marcus", 0.30),
    ("Darius", 0.12), ("Andre", 0.22), ("Tyrone", 0.15), ("Jamal", 0.10), ("Isaiah", 0.09),
)

_FALLBACK_LAST_NAMES: Sequence[Tuple[str, float]] = (
    ("Smith", 1.01), ("Johnson", 0.81), ("Williams", 0.70), ("Jones", 0.62), ("Brown", 0.62),
    ("Davis", 0.48), ("Miller", 0.42), ("Wilson", 0.34), ("Moore", 0.31), ("Taylor", 0.31),
    ("Anderson", 0.31), ("Thomas", 0.31), ("Jackson", 0.31), ("White", 0.28), ("Harris", 0.28),
    ("Martin", 0.27), ("Thompson", 0.27), ("Garcia", 0.25), ("Martinez", 0.23), ("Robinson", 0.23),
    ("Clark", 0.23), ("Rodriguez", 0.23), ("Lewis", 0.22), ("Lee", 0.22), ("Walker", 0.22),
    ("Hall", 0.20), ("Allen", 0.20), ("Young", 0.19), ("King", 0.19), ("Wright", 0.19),
)

# Face descriptor: feature -> number of variants.
_FACE_FEATURES: Dict[str, int] = {
    "head": 4,
    "eyebrows": 2,
    "eyes": 4,
    "nose": 3,
    "mouth": 5,
    "hair": 5,
}
_FACE_COLORS: Tuple[str, ...] = ("#f2d6cb", "#ddb7a0", "#ce967d", "#bb876f", "#aa816f", "#a67358", "#ad6453", "#74453d", "#5c3937")


def _cumulative(table: Sequence[Tuple[str, float]]) -> Tuple[List[str], List[float]]:
    names = [n for n, _ in table]
    cum = list(accumulate(float(w) for _, w in table))
    return names, cum


def _pick_cumulative(rng: RandomSource, names: Sequence[str], cum: Sequence[float]) -> str:
    r = rng.uniform(0.0, cum[-1])
    for name, c in zip(names, cum):
        if c >= r:
            return name
    return names[-1]


class DefaultIdentityService:
    """Fallback identity tables.

    Draws: name = uniform (first) + uniform (last); face = one ``randint`` per
    feature, one for skin color, one ``uniform`` for fatness.
    """

    def __init__(
        self,
        first_names: Sequence[Tuple[str, float]] = _FALLBACK_FIRST_NAMES,
        last_names: Sequence[Tuple[str, float]] = _FALLBACK_LAST_NAMES,
    ) -> None:
        self._first = _cumulative(first_names)
        self._last = _cumulative(last_names)

    def name(self, nationality: str, *, rng: RandomSource) -> str:  # noqa: ARG002
        fn = _pick_cumulative(rng, *self._first)
        ln = _pick_cumulative(rng, *self._last)
        return f"{fn} {ln}"

    def face(self, *, rng: RandomSource) -> Dict[str, Any]:
        face: Dict[str, Any] = {k: rng.randint(0, n - 1) for k, n in _FACE_FEATURES.items()}
        face["color"] = _FACE_COLORS[rng.randint(0, len(_FACE_COLORS) - 1)]
        face["fatness"] = round(rng.uniform(0.0, 1.0), 3)
        return face
