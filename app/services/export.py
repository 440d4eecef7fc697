"""History export in the fixed five-column CSV layout.

Only the description is quoted (with embedded quotes doubled); the other
columns are written as-is, so the output is not produced with ``csv.writer``.
"""

from datetime import date
from typing import Any, Iterable, Optional

from app.schemas.catalog import format_intervention_type

EXPORT_HEADER = ["Data", "Patrimônio", "Tipo", "Descrição", "Responsável"]


def _quote(value: Optional[str]) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def export_row(item: Any) -> str:
    return ",".join([
        item.start_date.strftime("%d/%m/%Y"),
        item.patrimony or "",
        format_intervention_type(item.type) or "",
        _quote(item.description),
        item.responsible or "",
    ])


def build_history_csv(interventions: Iterable[Any]) -> str:
    lines = [",".join(EXPORT_HEADER)]
    lines.extend(export_row(item) for item in interventions)
    return "\n".join(lines)


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"consulta_{today.isoformat()}.csv"
