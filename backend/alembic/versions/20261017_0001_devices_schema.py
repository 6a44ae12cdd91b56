"""Initial device registry schema: devices table."""

from alembic import op
import sqlalchemy as sa


revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


BRANDS = ("APPLE", "SAMSUNG", "GOOGLE", "XIAOMI", "HUAWEI", "MOTOROLA", "ONEPLUS", "SONY")
STATES = ("AVAILABLE", "IN_USE", "INACTIVE")


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "brand",
            sa.Enum(*BRANDS, name="brand", native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column(
            "state",
            sa.Enum(*STATES, name="state", native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column("creation_time", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("name", name="uq_devices_name"),
    )
    op.create_index("ix_devices_brand", "devices", ["brand"])
    op.create_index("ix_devices_state", "devices", ["state"])


def downgrade() -> None:
    op.drop_index("ix_devices_state", table_name="devices")
    op.drop_index("ix_devices_brand", table_name="devices")
    op.drop_table("devices")
