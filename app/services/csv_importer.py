"""CSV Import Service - Validate and import equipment from CSV files.

The file carries a header row with the fixed column names in
``EQUIPMENT_COLUMNS``. Rows are validated one by one; failing rows are
reported and skipped, valid rows go through ``EquipmentService`` exactly
like a single entry from the form.

Row numbers refer to the file: the header is row 1, the first data row is
row 2. Blank lines are dropped before numbering.
"""

import csv
import io
import math
import re
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple
from datetime import datetime
from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import RegistryException, ValidationError, format_validation_errors
from app.schemas.equipment import PATRIMONY_PATTERN, EquipmentCreate
from app.services.equipment_service import EquipmentService
from app.services.location_service import LocationService

logger = logging.getLogger(__name__)

EQUIPMENT_COLUMNS = [
    "patrimonio",
    "marca",
    "modelo",
    "numeroSerie",
    "localInicial",
    "peso",
    "cor",
    "potencia",
    "capacidade",
    "voltagem",
    "tipo",
    "observacoes",
    "dataEntrada",
]

TEMPLATE_EXAMPLE = [
    "AC00123",
    "Midea",
    "Springer Xtreme",
    "SN-4471-22",
    "Bloco A - Sala 101",
    "32.5",
    "branco",
    "12000",
    "12000",
    "220",
    "split",
    "Instalado na reforma",
    "15/01/2024",
]

DATE_FORMATS = ["%d/%m/%Y"]

ProgressCallback = Callable[[int], Any]


class ImportRowError(BaseModel):
    row: int
    error: str
    data: Dict[str, str]


class ImportResult(BaseModel):
    success: int
    errors: List[ImportRowError]
    total: int


# ========================
# Validation Schema
# ========================


def parse_entry_date(value: str) -> datetime:
    """Parse an ISO date/datetime or a dd/mm/yyyy date."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            raise ValueError("Entry date is not a valid date")
    return parsed


class EquipmentImportRow(BaseModel):
    """One CSV row, keyed by the file's column names."""

    patrimonio: str = ""
    marca: str = ""
    modelo: str = ""
    numeroSerie: str = ""
    localInicial: str = ""
    peso: str = ""
    cor: str = ""
    potencia: str = ""
    capacidade: str = ""
    voltagem: str = ""
    tipo: str = ""
    observacoes: str = ""
    dataEntrada: str = ""

    @field_validator("patrimonio")
    @classmethod
    def validate_patrimony(cls, v):
        if not v:
            raise ValueError("Patrimony is required")
        if not re.match(PATRIMONY_PATTERN, v):
            raise ValueError("Patrimony must have 3 to 20 letters or digits")
        return v

    @field_validator("localInicial")
    @classmethod
    def validate_location(cls, v):
        if not v:
            raise ValueError("Initial location is required")
        return v

    @field_validator("peso", "potencia", "capacidade")
    @classmethod
    def validate_number(cls, v):
        if v:
            try:
                number = float(v)
            except ValueError:
                raise ValueError("must be a number")
            if not math.isfinite(number):
                raise ValueError("must be a finite number")
        return v

    @field_validator("dataEntrada")
    @classmethod
    def validate_entry_date(cls, v):
        if v:
            parse_entry_date(v)
        return v

    def to_equipment_create(self) -> EquipmentCreate:
        return EquipmentCreate(
            patrimony=self.patrimonio,
            brand=self.marca,
            model=self.modelo,
            serial_number=self.numeroSerie,
            initial_location=self.localInicial,
            weight=self.peso or None,
            color=self.cor,
            power=self.potencia or None,
            capacity=self.capacidade or None,
            voltage=self.voltagem,
            category=self.tipo,
            notes=self.observacoes,
            entry_date=parse_entry_date(self.dataEntrada) if self.dataEntrada else None,
        )


# ========================
# Template Generator
# ========================


def generate_template_with_examples() -> str:
    """Header row plus one example row."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(EQUIPMENT_COLUMNS)
    writer.writerow(TEMPLATE_EXAMPLE)
    return output.getvalue()


# ========================
# Parsing and Validation
# ========================


def parse_csv_content(content: str) -> Tuple[List[str], List[Dict[str, str]]]:
    """Parse CSV content and return headers and rows.

    Quoted fields may contain commas and doubled quotes. Names and values
    are trimmed, missing trailing values become empty strings and values
    beyond the header are dropped.

    Raises:
        ValidationError: malformed CSV, or fewer than a header row and one
            data row
    """
    if content.startswith("\ufeff"):
        content = content[1:]  # BOM

    try:
        records = [
            record for record in csv.reader(io.StringIO(content))
            if any(cell.strip() for cell in record)
        ]
    except csv.Error as e:
        raise ValidationError(f"CSV file could not be parsed: {e}")
    if len(records) < 2:
        raise ValidationError("CSV file must contain a header row and at least one data row")

    headers = [h.strip() for h in records[0]]
    rows = []
    for record in records[1:]:
        values = [cell.strip() for cell in record]
        values += [""] * (len(headers) - len(values))
        rows.append({header: value for header, value in zip(headers, values) if header})
    return headers, rows


def validate_row(row: Dict[str, str], row_num: int) -> Tuple[bool, Optional[EquipmentCreate], Optional[str]]:
    """Validate a single row and return (is_valid, equipment_data, error_message)."""
    known = {key: value for key, value in row.items() if key in EQUIPMENT_COLUMNS}
    try:
        validated = EquipmentImportRow(**known)
        return True, validated.to_equipment_create(), None
    except PydanticValidationError as e:
        return False, None, format_validation_errors(e.errors())


def _report_progress(progress: Optional[ProgressCallback], processed: int, total: int) -> None:
    percent = round(processed / total * 100)
    logger.debug(f"CSV import progress: {percent}% ({processed}/{total})")
    if progress:
        progress(percent)


async def validate_csv_file(content: str) -> ImportResult:
    """Validate a CSV file without importing.

    Uniqueness is not checked; ``success`` counts the rows that would be
    submitted.
    """
    _, rows = parse_csv_content(content)

    errors = []
    valid_count = 0
    for i, row in enumerate(rows, start=2):
        is_valid, _, error = validate_row(row, i)
        if is_valid:
            valid_count += 1
        else:
            errors.append(ImportRowError(row=i, error=error, data=row))

    return ImportResult(success=valid_count, errors=errors, total=len(rows))


async def process_import(
    content: str,
    db_session: AsyncSession,
    progress: Optional[ProgressCallback] = None,
) -> ImportResult:
    """Import equipment rows one at a time.

    The batch always runs to the end; each rejected row is reported with
    its file row number and the row's raw values.
    """
    _, rows = parse_csv_content(content)
    total = len(rows)
    equipment_service = EquipmentService(db_session)
    location_service = LocationService(db_session)

    logger.info(f"Starting equipment CSV import: {total} rows")

    errors = []
    imported = 0
    for i, row in enumerate(rows, start=2):
        is_valid, data, error = validate_row(row, i)

        if not is_valid:
            logger.info(f"CSV row {i} rejected: {error}")
            errors.append(ImportRowError(row=i, error=error, data=row))
            _report_progress(progress, i - 1, total)
            continue

        await location_service.ensure_locations([data.initial_location])

        try:
            await equipment_service.create_equipment(data)
            imported += 1
        except RegistryException as e:
            logger.info(f"CSV row {i} rejected: {e.detail}")
            errors.append(ImportRowError(row=i, error=str(e.detail), data=row))
        except SQLAlchemyError as e:
            await db_session.rollback()
            logger.error(f"CSV row {i} failed to save: {e}")
            errors.append(ImportRowError(row=i, error="Failed to save equipment", data=row))

        _report_progress(progress, i - 1, total)

    logger.info(f"Equipment CSV import finished: {imported} imported, {len(errors)} rejected of {total}")
    return ImportResult(success=imported, errors=errors, total=total)
