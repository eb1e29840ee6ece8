from __future__ import annotations

"""Injury catalog.

Each entry is (label, relative frequency, typical games missed). The draw in
``injury.service`` is a single uniform roll over the cumulative frequency, so
the order here only matters for ties at the boundaries.
"""

from dataclasses import dataclass
from itertools import accumulate
from typing import Tuple


@dataclass(frozen=True, slots=True)
class InjuryType:
    label: str
    weight: float
    games: float


INJURY_TYPES: Tuple[InjuryType, ...] = (
    InjuryType("Achilles Tendinitis", 230, 4.8),
    InjuryType("Ankle Sprain", 2103, 3.2),
    InjuryType("Back Spasms", 482, 3.5),
    InjuryType("Bone Bruise", 260, 4.0),
    InjuryType("Broken Ankle", 45, 45.0),
    InjuryType("Broken Finger", 166, 9.6),
    InjuryType("Broken Foot", 110, 34.0),
    InjuryType("Broken Hand", 92, 21.0),
    InjuryType("Broken Nose", 84, 2.5),
    InjuryType("Bruised Knee", 402, 2.7),
    InjuryType("Calf Strain", 318, 6.5),
    InjuryType("Concussion", 232, 4.9),
    InjuryType("Dislocated Finger", 126, 2.9),
    InjuryType("Dislocated Shoulder", 54, 19.0),
    InjuryType("Elbow Sprain", 121, 5.4),
    InjuryType("Groin Strain", 421, 5.6),
    InjuryType("Hamstring Strain", 497, 4.9),
    InjuryType("Hip Flexor Strain", 254, 4.2),
    InjuryType("Knee Tendinitis", 611, 3.6),
    InjuryType("Plantar Fasciitis", 194, 9.2),
    InjuryType("Quadriceps Contusion", 203, 2.6),
    InjuryType("Shoulder Sprain", 297, 3.8),
    InjuryType("Sore Back", 845, 2.4),
    InjuryType("Sore Knee", 906, 2.6),
    InjuryType("Sprained Wrist", 243, 3.1),
    InjuryType("Stress Fracture", 62, 24.0),
    InjuryType("Torn ACL", 28, 82.0),
    InjuryType("Torn Achilles", 12, 82.0),
    InjuryType("Torn Meniscus", 95, 28.0),
    InjuryType("Viral Illness", 587, 1.8),
)

# Running totals of INJURY_TYPES weights; the last entry is the draw range.
CUMULATIVE_WEIGHTS: Tuple[float, ...] = tuple(accumulate(float(t.weight) for t in INJURY_TYPES))

TOTAL_WEIGHT: float = CUMULATIVE_WEIGHTS[-1]
