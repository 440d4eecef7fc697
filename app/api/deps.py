"""
FastAPI Dependencies

Session aliases for the two configured stores. Write paths use
``DbSession``; read-only browsing and report endpoints use
``PublicDbSession``.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db, get_public_db

DbSession = Annotated[AsyncSession, Depends(get_db)]
PublicDbSession = Annotated[AsyncSession, Depends(get_public_db)]
