"""
Dashboard aggregates.

Pure functions of the filtered record sets; nothing is cached, the
dashboard recomputes them on every request.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from app.schemas.catalog import (
    INTERVENTION_TYPE_LABELS,
    InterventionType,
    MAINTENANCE_TYPES,
    MONTH_LABELS,
    format_intervention_type,
)
from app.schemas.consultation import (
    CostReportRow,
    DashboardSummary,
    MonthlyCost,
    TypeCost,
    TypeCount,
)


def _cost(item: Any) -> float:
    return float(item.cost or 0)


def total_cost(interventions: Iterable[Any]) -> float:
    return sum(_cost(item) for item in interventions)


def pending_maintenance(interventions: Iterable[Any]) -> int:
    """Maintenance interventions that have not been closed with an end date."""
    return sum(1 for item in interventions if item.type in MAINTENANCE_TYPES and item.end_date is None)


def monthly_costs(interventions: Sequence[Any], collapse_years: bool = True) -> List[MonthlyCost]:
    """Cost per calendar month of the start date.

    With ``collapse_years`` every January lands in the same bucket regardless
    of year (12 buckets). Without it each year present in the data gets its
    own 12 buckets, oldest year first.
    """
    if collapse_years:
        buckets = [0.0] * 12
        for item in interventions:
            buckets[item.start_date.month - 1] += _cost(item)
        return [
            MonthlyCost(label=label, month=index + 1, cost=buckets[index])
            for index, label in enumerate(MONTH_LABELS)
        ]

    by_year: Dict[int, List[float]] = defaultdict(lambda: [0.0] * 12)
    for item in interventions:
        by_year[item.start_date.year][item.start_date.month - 1] += _cost(item)
    return [
        MonthlyCost(label=label, month=index + 1, year=year, cost=by_year[year][index])
        for year in sorted(by_year)
        for index, label in enumerate(MONTH_LABELS)
    ]


def count_by_type(interventions: Iterable[Any]) -> List[TypeCount]:
    counts: Dict[str, int] = {}
    for item in interventions:
        counts[item.type] = counts.get(item.type, 0) + 1
    return [TypeCount(type=key, label=format_intervention_type(key), count=value) for key, value in counts.items()]


def cost_by_type(interventions: Iterable[Any]) -> List[TypeCost]:
    costs: Dict[str, float] = {}
    for item in interventions:
        costs[item.type] = costs.get(item.type, 0.0) + _cost(item)
    return [TypeCost(type=key, label=format_intervention_type(key), cost=value) for key, value in costs.items()]


def cost_report(interventions: Iterable[Any]) -> List[CostReportRow]:
    """Count, total and average cost per intervention type."""
    totals: Dict[str, List[float]] = {}
    for item in interventions:
        entry = totals.setdefault(item.type, [0, 0.0])
        entry[0] += 1
        entry[1] += _cost(item)

    # Known types in catalog order, unknown ones after
    ordered = [key for key in INTERVENTION_TYPE_LABELS if key in totals]
    ordered += [key for key in totals if key not in INTERVENTION_TYPE_LABELS]
    return [
        CostReportRow(
            type=key,
            label=format_intervention_type(key),
            count=int(totals[key][0]),
            total=totals[key][1],
            average=totals[key][1] / totals[key][0],
        )
        for key in ordered
    ]


def equipment_status(equipment: Sequence[Any], interventions: Iterable[Any]) -> Tuple[int, int]:
    """Split equipment into (active, inactive).

    An item is inactive when its latest intervention is an uninstall.
    """
    latest: Dict[str, Any] = {}
    for item in interventions:
        current = latest.get(item.patrimony)
        if current is None or item.start_date > current.start_date:
            latest[item.patrimony] = item

    inactive = sum(
        1
        for item in equipment
        if item.patrimony in latest and latest[item.patrimony].type == InterventionType.UNINSTALL.value
    )
    return len(equipment) - inactive, inactive


def summarize(
    interventions: Sequence[Any],
    equipment: Sequence[Any],
    collapse_years: bool = True,
) -> DashboardSummary:
    active, inactive = equipment_status(equipment, interventions)
    return DashboardSummary(
        total_equipment=len(equipment),
        total_cost=total_cost(interventions),
        pending_maintenance=pending_maintenance(interventions),
        active_equipment=active,
        inactive_equipment=inactive,
        monthly_costs=monthly_costs(interventions, collapse_years=collapse_years),
        count_by_type=count_by_type(interventions),
        cost_by_type=cost_by_type(interventions),
        cost_report=cost_report(interventions),
    )
