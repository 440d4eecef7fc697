"""Location model: named places equipment is installed at or moved between."""
from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.sql import func

from app.database import Base


class Location(Base):
    __tablename__ = "locais"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nome", String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Location {self.name}>"
