"""Seed sample data for local development."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from halodkm import db
from halodkm.config import get_settings
from halodkm.models.event import EventCommitteeMember, EventRecipient, EventType
from halodkm.models.kas import Direction
from halodkm.schemas.event import EventCommitteeMemberCreate, EventCreate, EventRecipientCreate, EventTransactionCreate
from halodkm.schemas.kas import KasCreate
from halodkm.services import events, kas, participants

SEED_ACTOR_ID = 1


def main() -> None:
    settings = get_settings()
    print(f"Using database: {settings.database_url}")

    db.create_all()
    session = db.get_sessionmaker()()

    try:
        kas.create_entry(
            session,
            KasCreate(
                type=Direction.INFLOW,
                amount=Decimal("2500000"),
                description="Infaq Jumat",
                category="Infaq",
                tanggal=date(2026, 1, 2),
            ),
            actor_id=SEED_ACTOR_ID,
        )

        ramadhan = events.create_event(
            session,
            EventCreate(
                nama="Santunan Ramadhan",
                deskripsi="Paket sembako untuk dhuafa",
                tipe=EventType.DISTRIBUTION,
                tanggal_mulai=date(2026, 2, 18),
            ),
            actor_id=SEED_ACTOR_ID,
        )
        for payload in (
            EventTransactionCreate(
                type=Direction.INFLOW,
                amount=Decimal("5000000"),
                description="Donasi jamaah",
                tanggal=date(2026, 2, 20),
            ),
            EventTransactionCreate(
                type=Direction.OUTFLOW,
                amount=Decimal("3750000"),
                description="Pembelian sembako",
                tanggal=date(2026, 3, 1),
            ),
        ):
            events.add_transaction(session, ramadhan.id, payload, actor_id=SEED_ACTOR_ID)

        participants.create_row(
            session,
            EventRecipient,
            ramadhan.id,
            EventRecipientCreate(nama="Ibu Aminah", jenis_bantuan="Sembako", jumlah=Decimal("250000")),
            actor_id=SEED_ACTOR_ID,
        )
        participants.create_row(
            session,
            EventCommitteeMember,
            ramadhan.id,
            EventCommitteeMemberCreate(nama="Pak Hasan", jabatan="Ketua"),
            actor_id=SEED_ACTOR_ID,
        )
        print("Seed data inserted.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
