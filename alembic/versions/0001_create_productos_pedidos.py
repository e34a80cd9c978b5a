"""Создание таблиц Productos и Pedidos.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "Productos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nombre", sa.String(length=100), nullable=False),
        sa.Column("precio", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.CheckConstraint("stock >= 0", name="ck_productos_stock_non_negative"),
        sa.CheckConstraint("precio >= 0", name="ck_productos_precio_non_negative"),
    )
    op.create_table(
        "Pedidos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "producto_id",
            sa.Integer(),
            sa.ForeignKey("Productos.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("cantidad", sa.Integer(), nullable=False),
        sa.Column(
            "fecha",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("cantidad > 0", name="ck_pedidos_cantidad_positive"),
    )
    op.create_index("ix_Pedidos_producto_id", "Pedidos", ["producto_id"])


def downgrade() -> None:
    op.drop_index("ix_Pedidos_producto_id", table_name="Pedidos")
    op.drop_table("Pedidos")
    op.drop_table("Productos")
