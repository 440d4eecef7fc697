"""Create registry tables (equipamentos, intervencoes, locais)

Revision ID: 000_create_registry_tables
Revises:
Create Date: 2026-10-19

Note: intervencoes.patrimonio is not a foreign key; the API checks that the
equipment exists before inserting.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import text

# revision identifiers, used by Alembic.
revision = '000_create_registry_tables'
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(conn, name: str) -> bool:
    result = conn.execute(text(
        "SELECT EXISTS (SELECT FROM information_schema.tables WHERE table_name = :name)"
    ), {"name": name})
    return bool(result.scalar())


def upgrade():
    """Create registry tables."""
    conn = op.get_bind()

    if not _table_exists(conn, 'equipamentos'):
        op.create_table(
            'equipamentos',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('patrimonio', sa.String(20), nullable=False),
            sa.Column('marca', sa.String(100)),
            sa.Column('modelo', sa.String(100)),
            sa.Column('numero_serie', sa.String(100)),
            sa.Column('tipo', sa.String(50)),
            # Physical/electrical characteristics
            sa.Column('peso', sa.Float()),
            sa.Column('cor', sa.String(50)),
            sa.Column('potencia', sa.Float()),
            sa.Column('capacidade', sa.Float()),
            sa.Column('voltagem', sa.String(20)),
            sa.Column('local_inicial', sa.String(255), nullable=False),
            sa.Column('data_entrada', sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column('observacoes', sa.Text()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )
        op.create_index('ix_equipamentos_patrimonio', 'equipamentos', ['patrimonio'], unique=True)

    if not _table_exists(conn, 'intervencoes'):
        op.create_table(
            'intervencoes',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('patrimonio', sa.String(20), nullable=False),
            sa.Column('tipo', sa.String(50), nullable=False),
            sa.Column('descricao', sa.Text()),
            sa.Column('data_inicio', sa.DateTime(), nullable=False),
            sa.Column('data_termino', sa.DateTime()),
            sa.Column('local_origem', sa.String(255)),
            sa.Column('local_destino', sa.String(255)),
            sa.Column('custo', sa.Float(), nullable=False, server_default='0'),
            sa.Column('responsavel', sa.String(255)),
            sa.Column('observacoes', sa.Text()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )
        op.create_index('ix_intervencoes_patrimonio', 'intervencoes', ['patrimonio'])
        op.create_index('ix_intervencoes_tipo', 'intervencoes', ['tipo'])
        op.create_index('ix_intervencoes_data_inicio', 'intervencoes', ['data_inicio'])

    if not _table_exists(conn, 'locais'):
        op.create_table(
            'locais',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('nome', sa.String(255), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )
        op.create_index('ix_locais_nome', 'locais', ['nome'])


def downgrade():
    """Drop registry tables."""
    op.drop_table('locais')
    op.drop_table('intervencoes')
    op.drop_table('equipamentos')
