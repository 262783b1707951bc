from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from rockswap.constants import DEFAULT_PER_CELL


def as_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite number, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def finite_number(value: Any) -> Optional[float]:
    """Return ``value`` if it is already a finite int or float, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if math.isfinite(value) else None


def clean_table(table: Optional[Mapping[Any, Any]]) -> Dict[int, float]:
    cleaned: Dict[int, float] = {}
    if not isinstance(table, Mapping):
        return cleaned
    for key, value in table.items():
        size = as_number(key)
        points = finite_number(value)
        if size is None or points is None or size != int(size):
            continue
        cleaned[int(size)] = points
    return cleaned


@dataclass(slots=True)
class ScoringBonuses:
    """Bonus tables keyed by match size.

    ``exact`` pays when the size equals the key. ``at_least`` pays the bonus of
    the highest threshold not above the size. Both apply together.
    """
    exact: Dict[int, float] = field(default_factory=dict)
    at_least: Dict[int, float] = field(default_factory=dict)


@dataclass(slots=True)
class ScoringConfig:
    per_cell: float = DEFAULT_PER_CELL
    bonuses: ScoringBonuses = field(default_factory=ScoringBonuses)

    @property
    def effective_per_cell(self) -> float:
        value = finite_number(self.per_cell)
        if value is None or value < 0:
            return DEFAULT_PER_CELL
        return value

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ScoringConfig":
        """Load a config from plain data (e.g. parsed JSON), dropping malformed entries.

        Accepts ``perCell``/``per_cell`` and ``atLeast``/``at_least`` spellings and
        string size keys such as ``{"4": 5}``.
        """
        data = data if isinstance(data, Mapping) else {}
        per_cell = finite_number(data.get("per_cell", data.get("perCell")))
        if per_cell is None or per_cell < 0:
            per_cell = DEFAULT_PER_CELL
        raw_bonuses = data.get("bonuses")
        raw_bonuses = raw_bonuses if isinstance(raw_bonuses, Mapping) else {}
        bonuses = ScoringBonuses(
            exact=clean_table(raw_bonuses.get("exact")),
            at_least=clean_table(raw_bonuses.get("at_least", raw_bonuses.get("atLeast"))),
        )
        return cls(per_cell=per_cell, bonuses=bonuses)


def default_scoring() -> ScoringConfig:
    """Stock rules: 10 per cell, +5 for exactly 4, +15 for exactly 5, +25 for 6 or more."""
    return ScoringConfig(
        per_cell=DEFAULT_PER_CELL,
        bonuses=ScoringBonuses(exact={3: 0, 4: 5, 5: 15}, at_least={6: 25}),
    )
