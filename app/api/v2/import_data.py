"""Data Import API - equipment CSV import and template download.

Features:
- CSV template with the expected header and one example row
- CSV validation without writing anything
- Row-by-row import that reports each rejected row and keeps going
"""
from fastapi import APIRouter, UploadFile, File
from fastapi.responses import StreamingResponse
import logging
import io

from app.api.deps import DbSession
from app.config import settings
from app.exceptions import ErrorCode, RegistryException
from app.services.csv_importer import (
    EQUIPMENT_COLUMNS,
    ImportResult,
    generate_template_with_examples,
    validate_csv_file,
    process_import,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def read_upload(file: UploadFile) -> str:
    """Read an uploaded CSV as text, UTF-8 first, then latin-1."""
    content = await file.read()
    max_bytes = settings.IMPORT_MAX_FILE_SIZE_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise RegistryException(
            status_code=413,
            code=ErrorCode.INVALID_FORMAT,
            detail=f"File exceeds the {settings.IMPORT_MAX_FILE_SIZE_MB} MB import limit",
        )

    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        # Spreadsheet exports on Windows are often latin-1
        return content.decode("latin-1")


# ========================
# Template Endpoint
# ========================

@router.get("/template")
async def download_template():
    """Download the equipment CSV template."""
    content = generate_template_with_examples()

    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={
            "Content-Disposition": "attachment; filename=template_equipamentos.csv"
        }
    )


# ========================
# Validation Endpoint
# ========================

@router.post("/validate", response_model=ImportResult)
async def validate_import_file(file: UploadFile = File(...)):
    """Validate a CSV file without importing. Returns the rows that would be rejected."""
    content_str = await read_upload(file)
    return await validate_csv_file(content_str)


# ========================
# Import Endpoint
# ========================

@router.post("/equipment", response_model=ImportResult)
async def import_equipment_file(db: DbSession, file: UploadFile = File(...)):
    """Import equipment from a CSV file."""
    content_str = await read_upload(file)
    logger.info(f"Received equipment import {file.filename}")

    return await process_import(content_str, db)


@router.get("/status")
async def get_import_status():
    """Import limits and the expected columns."""
    return {
        "status": "ready",
        "columns": EQUIPMENT_COLUMNS,
        "max_file_size_mb": settings.IMPORT_MAX_FILE_SIZE_MB,
        "supported_encodings": ["utf-8", "latin-1"],
    }
