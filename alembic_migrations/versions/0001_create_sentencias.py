"""create sentencias

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sentencias",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("anio", sa.String(length=4), nullable=False),
        sa.Column("mes", sa.String(length=16), nullable=False),
        sa.Column("dia", sa.String(length=2), nullable=False),
        sa.Column("sala", sa.String(length=128), nullable=False),
        sa.Column("sala_num", sa.Integer(), nullable=False),
        sa.Column("expediente", sa.String(length=64), nullable=False),
        sa.Column("identificador", sa.String(length=128), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
    )
    op.create_index("ix_sentencias_anio", "sentencias", ["anio"])
    op.create_index("ix_sentencias_sala_num", "sentencias", ["sala_num"])
    op.create_index("ix_sentencias_expediente", "sentencias", ["expediente"])


def downgrade() -> None:
    op.drop_index("ix_sentencias_expediente", table_name="sentencias")
    op.drop_index("ix_sentencias_sala_num", table_name="sentencias")
    op.drop_index("ix_sentencias_anio", table_name="sentencias")
    op.drop_table("sentencias")
