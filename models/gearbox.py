"""
Gear selector and transmission ratios.

Two ratio tables exist: the short "torque" table and the tall "economy" table.
Reverse carries a negative ratio so transmission RPM changes sign; Neutral is
always zero so the wheels are decoupled from the engine whatever its speed.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Mapping


class Gear(Enum):
    NEUTRAL = "N"
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    FOURTH = "4"
    FIFTH = "5"
    REVERSE = "R"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GearTable:
    """Pure mapping from gear selector to signed transmission ratio."""
    name: str
    ratios: Mapping[Gear, float]

    def __post_init__(self):
        missing = set(Gear) - set(self.ratios)
        if missing:
            raise ValueError(f"Gear table '{self.name}' has no ratio for {sorted(g.name for g in missing)}")
        if self.ratios[Gear.NEUTRAL] != 0.0:
            raise ValueError(f"Gear table '{self.name}': neutral ratio must be 0")

    def ratio(self, gear: Gear) -> float:
        return self.ratios[gear]


TORQUE_GEAR_TABLE = GearTable(
    name="torque",
    ratios={
        Gear.REVERSE: -0.75,
        Gear.NEUTRAL: 0.0,
        Gear.FIRST: 0.75,
        Gear.SECOND: 1.25,
        Gear.THIRD: 1.75,
        Gear.FOURTH: 2.25,
        Gear.FIFTH: 3.0,
    },
)

ECONOMY_GEAR_TABLE = GearTable(
    name="economy",
    ratios={
        Gear.REVERSE: -0.10,
        Gear.NEUTRAL: 0.0,
        Gear.FIRST: 0.30,
        Gear.SECOND: 0.50,
        Gear.THIRD: 0.80,
        Gear.FOURTH: 1.0,
        Gear.FIFTH: 1.40,
    },
)

GEAR_TABLES: Dict[str, GearTable] = {
    TORQUE_GEAR_TABLE.name: TORQUE_GEAR_TABLE,
    ECONOMY_GEAR_TABLE.name: ECONOMY_GEAR_TABLE,
}


def get_gear_table(name: str) -> GearTable:
    try:
        return GEAR_TABLES[name.lower()]
    except KeyError as e:
        raise ValueError(f"Unknown gear table: {name}. Options: {list(GEAR_TABLES.keys())}") from e


# Allowed shifts. The vehicle does not enforce these; drivers use them to pick
# the next gear.
GEAR_TRANSITIONS: Mapping[Gear, FrozenSet[Gear]] = {
    Gear.NEUTRAL: frozenset({Gear.FIRST, Gear.REVERSE}),
    Gear.FIRST: frozenset({Gear.NEUTRAL, Gear.SECOND}),
    Gear.SECOND: frozenset({Gear.FIRST, Gear.THIRD}),
    Gear.THIRD: frozenset({Gear.SECOND, Gear.FOURTH}),
    Gear.FOURTH: frozenset({Gear.THIRD, Gear.FIFTH}),
    Gear.FIFTH: frozenset({Gear.FOURTH}),
    Gear.REVERSE: frozenset({Gear.NEUTRAL}),
}


def can_shift(current: Gear, target: Gear) -> bool:
    """True if `target` is one step away from `current` in the shift graph."""
    return target in GEAR_TRANSITIONS[current]
