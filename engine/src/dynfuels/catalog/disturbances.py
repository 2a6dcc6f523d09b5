"""Disturbance conversion rules.

A rule forces a fuel type on cells where a matching harvest prescription,
fire severity or wind severity was recorded within the last `max_age` years.
Several rules may force the same fuel index. Definition order matters: a
later rule overrides an earlier one on the same cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from dynfuels.catalog.fuel_types import check_fuel_index
from dynfuels.errors import InputValueError

FIRE_SEVERITY_PREFIX = "FireSeverity"
WIND_SEVERITY_PREFIX = "WindSeverity"


def matches_severity(label: str, prefix: str, severity: int) -> bool:
    """Check a severity-coded label against a recorded severity.

    Only the last character of the label is compared, so "FireSeverity3"
    matches severity 3 and a two-digit severity never matches.
    """
    return label.startswith(prefix) and label[-1:] == str(severity)


@dataclass(frozen=True)
class DisturbanceOverride:
    """A disturbance-triggered reclassification rule.

    Attributes:
        fuel_index: Fuel type forced on triggered cells
        max_age: Years since the event during which the rule applies
        prescriptions: Harvest prescription names and/or severity labels
    """

    fuel_index: int
    max_age: int
    prescriptions: tuple[str, ...]

    def __post_init__(self) -> None:
        check_fuel_index(self.fuel_index)
        if self.max_age <= 0:
            raise InputValueError("Max Age", self.max_age, "Value must be > 0.")
        prescriptions = tuple(self.prescriptions)
        if not prescriptions:
            raise InputValueError(
                "Prescription", prescriptions, "At least one prescription is required."
            )
        object.__setattr__(self, "prescriptions", prescriptions)

    def is_recent(self, time_since_event: int | None) -> bool:
        return time_since_event is not None and time_since_event <= self.max_age

    def matches_prescription(self, prescription: str) -> bool:
        name = prescription.strip()
        return any(name == p.strip() for p in self.prescriptions)

    def matches_fire_severity(self, severity: int) -> bool:
        return any(
            matches_severity(p, FIRE_SEVERITY_PREFIX, severity)
            for p in self.prescriptions
        )

    def matches_wind_severity(self, severity: int) -> bool:
        return any(
            matches_severity(p, WIND_SEVERITY_PREFIX, severity)
            for p in self.prescriptions
        )


class DisturbanceCatalog:
    """Ordered collection of disturbance rules. Duplicate indices are legal."""

    def __init__(self, rules: Iterable[DisturbanceOverride] = ()):
        self._rules = tuple(rules)

    def __iter__(self) -> Iterator[DisturbanceOverride]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
