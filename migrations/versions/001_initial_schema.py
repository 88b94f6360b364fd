"""Initial schema for ensgraph.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TYPE friendship_status AS ENUM ('pending', 'accepted');
    """)

    # Create users table
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column(
            "ens_name",
            sa.String(255),
            nullable=False,
            comment="Trimmed, lowercased ENS name",
        ),
        sa.Column("address", sa.String(42), nullable=False),
        sa.Column("avatar", sa.String(2048), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("ens_name", name="uq_users_ens_name"),
    )

    # Create friendships table
    op.create_table(
        "friendships",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column(
            "initiator_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey(
                "users.id",
                ondelete="CASCADE",
                name="fk_friendships_initiator_id_users",
            ),
            nullable=False,
        ),
        sa.Column(
            "receiver_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey(
                "users.id",
                ondelete="CASCADE",
                name="fk_friendships_receiver_id_users",
            ),
            nullable=False,
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "accepted", name="friendship_status", create_type=False
            ),
            server_default="pending",
            nullable=False,
        ),
        sa.Column("pair_key", sa.String(73), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_friendships"),
        sa.UniqueConstraint("pair_key", name="uq_friendships_pair_key"),
        sa.CheckConstraint(
            "initiator_id <> receiver_id",
            name="ck_friendships_no_self_friendship",
        ),
    )
    op.create_index("ix_friendships_receiver_id", "friendships", ["receiver_id"])


def downgrade() -> None:
    op.drop_index("ix_friendships_receiver_id", table_name="friendships")
    op.drop_table("friendships")
    op.drop_table("users")
    op.execute("DROP TYPE friendship_status")
