"""
Filter Engine

Applies the dashboard's optional criteria to in-memory record lists. Every
criterion left empty is ignored; the rest are combined with AND, and the
input order is preserved.

Brand and power live on the equipment, so intervention filtering joins
through an index keyed by patrimony. Build the index once per data load
with ``build_equipment_index`` and pass it to every call.
"""

from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Optional

from app.schemas.consultation import FilterCriteria

# Inclusive day bounds
DAY_START = time(0, 0, 0, 0)
DAY_END = time.max


def build_equipment_index(equipment: Iterable[Any]) -> Dict[str, Any]:
    """Map patrimony to equipment record."""
    return {item.patrimony: item for item in equipment}


def format_power(value: Optional[float]) -> Optional[str]:
    """Text form of a power rating; integral values drop the trailing ``.0``."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _contains(haystack: Optional[str], needle: str) -> bool:
    if haystack is None:
        return False
    return needle.lower() in haystack.lower()


def day_bounds(start: Optional[date], end: Optional[date]) -> tuple[Optional[datetime], Optional[datetime]]:
    """Widen a date range to the first and last millisecond of its days."""
    lower = datetime.combine(start, DAY_START) if start else None
    upper = datetime.combine(end, DAY_END) if end else None
    return lower, upper


def _equipment_matches(item: Any, criteria: FilterCriteria) -> bool:
    if criteria.brand and not _contains(item.brand, criteria.brand):
        return False
    if criteria.power and not _contains(format_power(item.power), criteria.power):
        return False
    return True


def filter_interventions(
    interventions: Iterable[Any],
    equipment_index: Dict[str, Any],
    criteria: FilterCriteria,
) -> List[Any]:
    """Return the interventions matching every active criterion, in input order."""
    if criteria.is_empty:
        return list(interventions)

    types = set(criteria.types)
    locations = set(criteria.locations)
    lower, upper = day_bounds(criteria.start_date, criteria.end_date)
    needs_equipment = bool(criteria.brand or criteria.power)

    matched = []
    for item in interventions:
        if criteria.patrimony and not _contains(item.patrimony, criteria.patrimony):
            continue
        if types and item.type not in types:
            continue
        if locations and item.origin not in locations and item.destination not in locations:
            continue
        if lower and item.start_date < lower:
            continue
        if upper and item.start_date > upper:
            continue
        if needs_equipment:
            equipment = equipment_index.get(item.patrimony)
            if equipment is None or not _equipment_matches(equipment, criteria):
                continue
        matched.append(item)
    return matched


def filter_equipment(equipment: Iterable[Any], criteria: FilterCriteria) -> List[Any]:
    """Apply the equipment-level criteria: patrimony, brand, power and location."""
    if criteria.is_empty:
        return list(equipment)

    locations = set(criteria.locations)

    matched = []
    for item in equipment:
        if criteria.patrimony and not _contains(item.patrimony, criteria.patrimony):
            continue
        if locations and item.initial_location not in locations:
            continue
        if not _equipment_matches(item, criteria):
            continue
        matched.append(item)
    return matched


def sort_timeline(interventions: Iterable[Any]) -> List[Any]:
    """Most recent start date first."""
    return sorted(interventions, key=lambda item: item.start_date, reverse=True)
