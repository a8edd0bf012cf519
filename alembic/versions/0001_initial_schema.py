"""Initial schema: events, event ledgers, mosque cash ledger, audit logs.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _value_enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        *_timestamps(),
        sa.Column("nama", sa.String(length=255), nullable=False),
        sa.Column("deskripsi", sa.Text(), nullable=True),
        sa.Column("tipe", _value_enum("event_type", "penggalangan_dana", "distribusi"), nullable=False),
        sa.Column("tanggal_mulai", sa.Date(), nullable=False),
        sa.Column("tanggal_selesai", sa.Date(), nullable=True),
        sa.Column("status", _value_enum("event_status", "aktif", "selesai"), nullable=False),
        sa.CheckConstraint(
            "(status = 'selesai' AND tanggal_selesai IS NOT NULL)"
            " OR (status <> 'selesai' AND tanggal_selesai IS NULL)",
            name="ck_events_completion_date_matches_status",
        ),
    )
    op.create_index("ix_events_status", "events", ["status"], unique=False)
    op.create_index("ix_events_tanggal_mulai", "events", ["tanggal_mulai"], unique=False)

    op.create_table(
        "event_kas",
        *_timestamps(),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("type", _value_enum("cash_direction", "masuk", "keluar"), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2, asdecimal=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tanggal", sa.Date(), nullable=False),
        sa.Column("idempotency_key", sa.String(length=64), nullable=True),
        sa.CheckConstraint("amount > 0", name="ck_event_kas_positive_amount"),
    )
    op.create_index("ix_event_kas_event_id", "event_kas", ["event_id"], unique=False)
    op.create_index("ix_event_kas_event_tanggal", "event_kas", ["event_id", "tanggal"], unique=False)
    op.create_index("ix_event_kas_idempotency_key", "event_kas", ["idempotency_key"], unique=True)

    op.create_table(
        "kas_masjid",
        *_timestamps(),
        sa.Column("type", _value_enum("cash_direction", "masuk", "keluar"), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2, asdecimal=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("tanggal", sa.Date(), nullable=False),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("idempotency_key", sa.String(length=64), nullable=True),
        sa.CheckConstraint("amount > 0", name="ck_kas_masjid_positive_amount"),
    )
    op.create_index("ix_kas_masjid_tanggal", "kas_masjid", ["tanggal"], unique=False)
    op.create_index("ix_kas_masjid_type", "kas_masjid", ["type"], unique=False)
    op.create_index("ix_kas_masjid_event_id", "kas_masjid", ["event_id"], unique=False)
    op.create_index("ix_kas_masjid_idempotency_key", "kas_masjid", ["idempotency_key"], unique=True)

    op.create_table(
        "event_recipients",
        *_timestamps(),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nama", sa.String(length=255), nullable=False),
        sa.Column("alamat", sa.Text(), nullable=True),
        sa.Column("no_hp", sa.String(length=32), nullable=True),
        sa.Column("jenis_bantuan", sa.String(length=100), nullable=True),
        sa.Column("jumlah", sa.Numeric(18, 2, asdecimal=True), nullable=True),
        sa.Column("keterangan", sa.Text(), nullable=True),
    )
    op.create_index("ix_event_recipients_event_id", "event_recipients", ["event_id"], unique=False)

    op.create_table(
        "event_committee_members",
        *_timestamps(),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nama", sa.String(length=255), nullable=False),
        sa.Column("jabatan", sa.String(length=100), nullable=True),
        sa.Column("no_hp", sa.String(length=32), nullable=True),
        sa.Column("keterangan", sa.Text(), nullable=True),
    )
    op.create_index(
        "ix_event_committee_members_event_id", "event_committee_members", ["event_id"], unique=False
    )

    op.create_table(
        "audit_logs",
        *_timestamps(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("entity", sa.String(length=100), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("data_json", sa.JSON(), nullable=False),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"], unique=False)
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_user_id", table_name="audit_logs")
    op.drop_table("audit_logs")

    op.drop_index("ix_event_committee_members_event_id", table_name="event_committee_members")
    op.drop_table("event_committee_members")

    op.drop_index("ix_event_recipients_event_id", table_name="event_recipients")
    op.drop_table("event_recipients")

    op.drop_index("ix_kas_masjid_idempotency_key", table_name="kas_masjid")
    op.drop_index("ix_kas_masjid_event_id", table_name="kas_masjid")
    op.drop_index("ix_kas_masjid_type", table_name="kas_masjid")
    op.drop_index("ix_kas_masjid_tanggal", table_name="kas_masjid")
    op.drop_table("kas_masjid")

    op.drop_index("ix_event_kas_idempotency_key", table_name="event_kas")
    op.drop_index("ix_event_kas_event_tanggal", table_name="event_kas")
    op.drop_index("ix_event_kas_event_id", table_name="event_kas")
    op.drop_table("event_kas")

    op.drop_index("ix_events_tanggal_mulai", table_name="events")
    op.drop_index("ix_events_status", table_name="events")
    op.drop_table("events")
