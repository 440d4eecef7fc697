"""Tests for the equipment CSV importer."""
from datetime import datetime

import pytest
from sqlalchemy import select

from app.exceptions import ValidationError
from app.models.equipment import Equipment
from app.models.location import Location
from app.services.csv_importer import (
    EQUIPMENT_COLUMNS,
    generate_template_with_examples,
    parse_csv_content,
    process_import,
    validate_csv_file,
    validate_row,
)

HEADER = ",".join(EQUIPMENT_COLUMNS)


def csv_text(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


class TestParseCsvContent:
    """Tests for parse_csv_content."""

    def test_quoted_fields_keep_commas_and_quotes(self):
        content = csv_text('AC00001,Midea,,,"Bloco A, Sala 1",,,,,,,"Unidade ""nova""",')
        _, rows = parse_csv_content(content)
        assert rows[0]["localInicial"] == "Bloco A, Sala 1"
        assert rows[0]["observacoes"] == 'Unidade "nova"'

    def test_trims_and_pads_missing_values(self):
        content = " patrimonio , localInicial ,marca\n AC00001 , Sala 1\n"
        headers, rows = parse_csv_content(content)
        assert headers == ["patrimonio", "localInicial", "marca"]
        assert rows == [{"patrimonio": "AC00001", "localInicial": "Sala 1", "marca": ""}]

    def test_blank_lines_skipped(self):
        content = csv_text("AC00001,,,,Sala 1", "", "AC00002,,,,Sala 2")
        _, rows = parse_csv_content(content)
        assert [r["patrimonio"] for r in rows] == ["AC00001", "AC00002"]

    def test_oversized_field_is_a_validation_error(self):
        content = csv_text("AC00001,,,,Sala 1,,,,,,," + "x" * 200_000)
        with pytest.raises(ValidationError):
            parse_csv_content(content)

    @pytest.mark.parametrize("content", ["", HEADER, HEADER + "\n\n"])
    def test_needs_header_and_one_row(self, content):
        with pytest.raises(ValidationError):
            parse_csv_content(content)


class TestValidateRow:
    """Tests for validate_row."""

    def test_valid_row(self):
        is_valid, data, error = validate_row(
            {"patrimonio": "AC00001", "localInicial": "Sala 1", "potencia": "12000", "dataEntrada": "15/01/2024"},
            2,
        )
        assert is_valid
        assert error is None
        assert data.patrimony == "AC00001"
        assert data.power == 12000.0
        assert data.entry_date == datetime(2024, 1, 15)

    def test_iso_entry_date(self):
        is_valid, data, _ = validate_row(
            {"patrimonio": "AC00001", "localInicial": "Sala 1", "dataEntrada": "2024-01-15T10:30:00"}, 2
        )
        assert is_valid
        assert data.entry_date == datetime(2024, 1, 15, 10, 30)

    def test_patrimony_with_space_rejected(self):
        is_valid, data, error = validate_row({"patrimonio": "AC 001", "localInicial": "Sala 1"}, 3)
        assert not is_valid
        assert data is None
        assert "patrimonio" in error

    def test_all_failures_joined(self):
        is_valid, _, error = validate_row(
            {"patrimonio": "", "localInicial": "", "peso": "pesado", "dataEntrada": "ontem"}, 2
        )
        assert not is_valid
        parts = error.split("; ")
        assert len(parts) == 4
        assert parts[0].startswith("patrimonio")

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_numbers_rejected(self, value):
        is_valid, _, error = validate_row({"patrimonio": "AC00001", "localInicial": "Sala 1", "potencia": value}, 2)
        assert not is_valid
        assert error.startswith("potencia")


class TestTemplate:
    def test_template_has_header_and_example(self):
        lines = generate_template_with_examples().strip().split("\n")
        assert lines[0] == HEADER
        assert len(lines) == 2
        is_valid, _, _ = validate_row(dict(zip(EQUIPMENT_COLUMNS, lines[1].split(","))), 2)
        assert is_valid


class TestValidateCsvFile:
    """Tests for validate-only mode."""

    @pytest.mark.asyncio
    async def test_counts_rows_without_writing(self):
        content = csv_text("AC00001,,,,Sala 1", "AC 002,,,,Sala 2", "AC00001,,,,Sala 3")
        result = await validate_csv_file(content)
        # Duplicates are only caught on import
        assert result.success == 2
        assert result.total == 3
        assert [e.row for e in result.errors] == [3]


class TestProcessImport:
    """Tests for process_import against the database."""

    @pytest.mark.asyncio
    async def test_imports_valid_rows_and_reports_bad_ones(self, test_db):
        content = csv_text(
            "AC00001,Midea,,,Sala 1,,,12000,,,split,,",
            "AC 002,LG,,,Sala 2",
            "AC00003,LG,,,,",
        )
        result = await process_import(content, test_db)

        assert result.total == 3
        assert result.success == 1
        assert [(e.row, e.data["patrimonio"]) for e in result.errors] == [(3, "AC 002"), (4, "AC00003")]

        stored = (await test_db.execute(select(Equipment))).scalars().all()
        assert [e.patrimony for e in stored] == ["AC00001"]
        assert stored[0].power == 12000.0

    @pytest.mark.asyncio
    async def test_duplicate_patrimony_is_a_row_error(self, test_db, registered_equipment):
        content = csv_text("AC00001,,,,Sala 9", "AC00010,,,,Sala 9")
        result = await process_import(content, test_db)

        assert result.success == 1
        assert result.errors[0].row == 2
        assert "already registered" in result.errors[0].error

    @pytest.mark.asyncio
    async def test_creates_unknown_locations(self, test_db):
        content = csv_text("AC00001,,,,Sala Nova", "AC00002,,,,Sala Nova")
        await process_import(content, test_db)

        names = (await test_db.execute(select(Location.name))).scalars().all()
        assert names == ["Sala Nova"]

    @pytest.mark.asyncio
    async def test_progress_reported_per_row(self, test_db):
        content = csv_text("AC00001,,,,Sala 1", "bad row,,,,", "AC00003,,,,Sala 3")
        progress = []
        await process_import(content, test_db, progress=progress.append)
        assert progress == [33, 67, 100]
