"""Catalog API - fixed enumerations for forms and charts."""
from fastapi import APIRouter

from app.schemas.catalog import CatalogResponse, build_catalog

router = APIRouter()


@router.get("", response_model=CatalogResponse)
async def get_catalog():
    return build_catalog()
