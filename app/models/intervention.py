"""Intervention model: any recorded event against an equipment item."""
from sqlalchemy import Column, String, DateTime, Text, Integer, Float
from sqlalchemy.sql import func

from app.database import Base


class Intervention(Base):
    """Maintenance, complaint, reservation, relocation or uninstall of a unit.

    ``patrimony`` is not a foreign key; the creation path checks that the
    equipment exists before inserting.
    """

    __tablename__ = "intervencoes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patrimony = Column("patrimonio", String(20), nullable=False, index=True)

    type = Column("tipo", String(50), nullable=False, index=True)
    description = Column("descricao", Text, nullable=True)

    start_date = Column("data_inicio", DateTime, nullable=False, index=True)
    end_date = Column("data_termino", DateTime, nullable=True)

    origin = Column("local_origem", String(255), nullable=True)
    destination = Column("local_destino", String(255), nullable=True)

    cost = Column("custo", Float, nullable=False, default=0)
    responsible = Column("responsavel", String(255), nullable=True)
    notes = Column("observacoes", Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Intervention {self.id} - {self.type} {self.patrimony}>"
