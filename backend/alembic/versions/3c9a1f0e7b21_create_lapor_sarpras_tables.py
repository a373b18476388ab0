"""create users, sarpras, laporan, audit_logs, revoked_tokens

Revision ID: 3c9a1f0e7b21
Revises:
Create Date: 2026-10-19 10:12:44.512093

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9a1f0e7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("nama", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "sarpras",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("kode_sarpras", sa.String(), nullable=False),
        sa.Column("nama_sarpras", sa.String(), nullable=False),
        sa.Column("kategori", sa.String(), nullable=True),
        sa.Column("lokasi", sa.String(), nullable=True),
        sa.Column("kondisi", sa.String(), nullable=False, server_default="baik"),
        sa.Column("qr_code", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index(op.f("ix_sarpras_id"), "sarpras", ["id"], unique=False)
    op.create_index(op.f("ix_sarpras_kode_sarpras"), "sarpras", ["kode_sarpras"], unique=True)
    op.create_index("ix_sarpras_kategori", "sarpras", ["kategori"], unique=False)

    op.create_table(
        "laporan",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "sarpras_id",
            sa.Integer(),
            sa.ForeignKey("sarpras.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("deskripsi", sa.Text(), nullable=False),
        sa.Column("lokasi", sa.String(), nullable=True),
        sa.Column("tanggal_laporan", sa.Date(), nullable=False),
        sa.Column("foto", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="menunggu"),
        sa.Column("catatan_admin", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "status IN ('menunggu', 'diproses', 'selesai')",
            name="ck_laporan_status",
        ),
    )
    op.create_index(op.f("ix_laporan_id"), "laporan", ["id"], unique=False)
    op.create_index(op.f("ix_laporan_user_id"), "laporan", ["user_id"], unique=False)
    op.create_index(op.f("ix_laporan_sarpras_id"), "laporan", ["sarpras_id"], unique=False)
    op.create_index("ix_laporan_status", "laporan", ["status"], unique=False)
    op.create_index("ix_laporan_created_at", "laporan", ["created_at"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity", sa.String(), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("summary", sa.String(), nullable=True),
        sa.Column("actor", sa.String(), nullable=False, server_default="system"),
        sa.Column("ip", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f("ix_audit_logs_id"), "audit_logs", ["id"], unique=False)
    op.create_index(op.f("ix_audit_logs_entity"), "audit_logs", ["entity"], unique=False)
    op.create_index(op.f("ix_audit_logs_entity_id"), "audit_logs", ["entity_id"], unique=False)

    op.create_table(
        "revoked_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("jti", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f("ix_revoked_tokens_id"), "revoked_tokens", ["id"], unique=False)
    op.create_index(op.f("ix_revoked_tokens_jti"), "revoked_tokens", ["jti"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_revoked_tokens_jti"), table_name="revoked_tokens")
    op.drop_index(op.f("ix_revoked_tokens_id"), table_name="revoked_tokens")
    op.drop_table("revoked_tokens")

    op.drop_index(op.f("ix_audit_logs_entity_id"), table_name="audit_logs")
    op.drop_index(op.f("ix_audit_logs_entity"), table_name="audit_logs")
    op.drop_index(op.f("ix_audit_logs_id"), table_name="audit_logs")
    op.drop_table("audit_logs")

    op.drop_index("ix_laporan_created_at", table_name="laporan")
    op.drop_index("ix_laporan_status", table_name="laporan")
    op.drop_index(op.f("ix_laporan_sarpras_id"), table_name="laporan")
    op.drop_index(op.f("ix_laporan_user_id"), table_name="laporan")
    op.drop_index(op.f("ix_laporan_id"), table_name="laporan")
    op.drop_table("laporan")

    op.drop_index("ix_sarpras_kategori", table_name="sarpras")
    op.drop_index(op.f("ix_sarpras_kode_sarpras"), table_name="sarpras")
    op.drop_index(op.f("ix_sarpras_id"), table_name="sarpras")
    op.drop_table("sarpras")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
