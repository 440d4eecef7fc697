"""Equipment model for tracking air-conditioning units by patrimony code."""
from sqlalchemy import Column, String, DateTime, Text, Integer, Float
from sqlalchemy.sql import func

from app.database import Base


class Equipment(Base):
    """Air-conditioning unit identified by its asset tag (patrimony)."""

    __tablename__ = "equipamentos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patrimony = Column("patrimonio", String(20), nullable=False, unique=True, index=True)

    # Equipment details
    brand = Column("marca", String(100), nullable=True)
    model = Column("modelo", String(100), nullable=True)
    serial_number = Column("numero_serie", String(100), nullable=True)
    category = Column("tipo", String(50), nullable=True)  # split, janela, cassete, piso-teto, portatil

    # Physical/electrical characteristics
    weight = Column("peso", Float, nullable=True)
    color = Column("cor", String(50), nullable=True)
    power = Column("potencia", Float, nullable=True)
    capacity = Column("capacidade", Float, nullable=True)
    voltage = Column("voltagem", String(20), nullable=True)  # 110, 220, bivolt

    # Placement
    initial_location = Column("local_inicial", String(255), nullable=False)
    entry_date = Column("data_entrada", DateTime, nullable=False, server_default=func.now())

    notes = Column("observacoes", Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Equipment {self.patrimony}>"
