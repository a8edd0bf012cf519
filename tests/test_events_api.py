"""Event endpoints."""
from decimal import Decimal

import pytest
from sqlalchemy import select

from halodkm.models import KasMasjid

EVENTS = "/api/v1/events"


async def _create_event(client, headers, **overrides):
    payload = {"nama": "Buka Puasa Bersama", "tanggal_mulai": "2026-03-01"}
    payload.update(overrides)
    response = await client.post(EVENTS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _add_transaction(client, headers, event_id, type_, amount, **extra):
    payload = {"type": type_, "amount": amount, "description": "Donasi", "tanggal": "2026-03-02"}
    return await client.post(f"{EVENTS}/{event_id}/transactions", json=payload, headers=headers, **extra)


@pytest.mark.anyio
async def test_create_event_defaults_type(client, admin_headers):
    event = await _create_event(client, admin_headers, tipe="", deskripsi="  ")

    assert event["tipe"] == "penggalangan_dana"
    assert event["status"] == "aktif"
    assert event["deskripsi"] is None
    assert event["tanggal_selesai"] is None


@pytest.mark.anyio
async def test_create_event_rejects_unknown_type(client, admin_headers):
    response = await client.post(
        EVENTS,
        json={"nama": "Kajian", "tipe": "lomba", "tanggal_mulai": "2026-03-01"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_INPUT"
    assert error["kind"] == "invalid_input"
    assert error["details"]["errors"]


@pytest.mark.anyio
async def test_create_event_requires_name(client, admin_headers):
    response = await client.post(EVENTS, json={"nama": " ", "tanggal_mulai": "2026-03-01"}, headers=admin_headers)

    assert response.status_code == 400


@pytest.mark.anyio
async def test_full_lifecycle_over_http(client, admin_headers, jamaah_headers, db_session):
    event = await _create_event(client, admin_headers)
    event_id = event["id"]

    assert (await _add_transaction(client, admin_headers, event_id, "masuk", "1000")).status_code == 201
    assert (await _add_transaction(client, admin_headers, event_id, "keluar", "300")).status_code == 201

    detail = await client.get(f"{EVENTS}/{event_id}", headers=jamaah_headers)
    assert detail.status_code == 200
    body = detail.json()
    assert len(body["transactions"]) == 2
    assert Decimal(body["summary"]["balance"]) == Decimal("700")

    completed = await client.post(f"{EVENTS}/{event_id}/complete", headers=admin_headers)
    assert completed.status_code == 200
    result = completed.json()
    assert Decimal(result["transferred_amount"]) == Decimal("700")
    assert result["event"]["status"] == "selesai"
    assert result["event"]["tanggal_selesai"] is not None
    assert result["kas_entry_id"] is not None
    assert "700" in result["message"]

    entry = db_session.scalars(select(KasMasjid).where(KasMasjid.id == result["kas_entry_id"])).one()
    assert entry.amount == Decimal("700.00")

    again = await client.post(f"{EVENTS}/{event_id}/complete", headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "EVENT_ALREADY_COMPLETED"

    late = await _add_transaction(client, admin_headers, event_id, "masuk", "50")
    assert late.status_code == 409
    assert late.json()["error"]["kind"] == "conflict"


@pytest.mark.anyio
async def test_complete_negative_balance_is_invalid_state(client, admin_headers):
    event = await _create_event(client, admin_headers)
    await _add_transaction(client, admin_headers, event["id"], "masuk", "100")
    await _add_transaction(client, admin_headers, event["id"], "keluar", "300")

    response = await client.post(f"{EVENTS}/{event['id']}/complete", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["kind"] == "invalid_state"
    assert error["code"] == "NEGATIVE_EVENT_BALANCE"

    detail = await client.get(f"{EVENTS}/{event['id']}", headers=admin_headers)
    assert detail.json()["event"]["status"] == "aktif"


@pytest.mark.anyio
async def test_complete_empty_event_reports_zero(client, admin_headers):
    event = await _create_event(client, admin_headers)

    response = await client.post(f"{EVENTS}/{event['id']}/complete", headers=admin_headers)

    assert response.status_code == 200
    assert Decimal(response.json()["transferred_amount"]) == Decimal("0")
    assert response.json()["kas_entry_id"] is None


@pytest.mark.anyio
@pytest.mark.parametrize("amount", ["0", "-5", "abc", "1.005"])
async def test_add_transaction_rejects_bad_amount(client, admin_headers, amount):
    event = await _create_event(client, admin_headers)

    response = await _add_transaction(client, admin_headers, event["id"], "masuk", amount)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.anyio
async def test_add_transaction_rejects_bad_direction(client, admin_headers):
    event = await _create_event(client, admin_headers)

    response = await _add_transaction(client, admin_headers, event["id"], "sideways", "10")

    assert response.status_code == 400


@pytest.mark.anyio
async def test_add_transaction_unknown_event(client, admin_headers):
    response = await _add_transaction(client, admin_headers, 404, "masuk", "10")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"


@pytest.mark.anyio
async def test_idempotent_transaction_header(client, admin_headers):
    event = await _create_event(client, admin_headers)
    headers = {**admin_headers, "Idempotency-Key": "donasi-001"}

    first = await _add_transaction(client, headers, event["id"], "masuk", "75")
    second = await _add_transaction(client, headers, event["id"], "masuk", "75")

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["id"] == second.json()["id"]
    detail = await client.get(f"{EVENTS}/{event['id']}", headers=admin_headers)
    assert len(detail.json()["transactions"]) == 1


@pytest.mark.anyio
async def test_update_and_delete_transaction(client, admin_headers):
    event = await _create_event(client, admin_headers)
    created = (await _add_transaction(client, admin_headers, event["id"], "masuk", "10")).json()
    url = f"{EVENTS}/{event['id']}/transactions/{created['id']}"

    updated = await client.put(
        url,
        json={"type": "masuk", "amount": "25.50", "description": "Koreksi", "tanggal": "2026-03-03"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert Decimal(updated.json()["amount"]) == Decimal("25.50")

    deleted = await client.delete(url, headers=admin_headers)
    assert deleted.status_code == 204
    assert (await client.delete(url, headers=admin_headers)).status_code == 404


@pytest.mark.anyio
async def test_delete_event_guard(client, admin_headers):
    event = await _create_event(client, admin_headers)
    await _add_transaction(client, admin_headers, event["id"], "masuk", "10")

    blocked = await client.delete(f"{EVENTS}/{event['id']}", headers=admin_headers)
    assert blocked.status_code == 409
    assert blocked.json()["error"]["code"] == "EVENT_HAS_TRANSACTIONS"

    empty = await _create_event(client, admin_headers, nama="Kosong")
    assert (await client.delete(f"{EVENTS}/{empty['id']}", headers=admin_headers)).status_code == 204
    assert (await client.get(f"{EVENTS}/{empty['id']}", headers=admin_headers)).status_code == 404


@pytest.mark.anyio
async def test_update_event(client, admin_headers):
    event = await _create_event(client, admin_headers)

    response = await client.put(
        f"{EVENTS}/{event['id']}",
        json={"nama": "Santunan Dhuafa", "tipe": "distribusi", "tanggal_mulai": "2026-04-01"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["nama"] == "Santunan Dhuafa"
    assert response.json()["tipe"] == "distribusi"


@pytest.mark.anyio
async def test_update_completed_event_conflicts(client, admin_headers):
    event = await _create_event(client, admin_headers)
    await client.post(f"{EVENTS}/{event['id']}/complete", headers=admin_headers)

    response = await client.put(
        f"{EVENTS}/{event['id']}",
        json={"nama": "Renamed", "tanggal_mulai": "2026-03-01"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EVENT_COMPLETED"


@pytest.mark.anyio
async def test_list_events_with_status_filter(client, admin_headers, jamaah_headers):
    open_event = await _create_event(client, admin_headers, nama="Terbuka")
    closed_event = await _create_event(client, admin_headers, nama="Tertutup", tanggal_mulai="2026-01-01")
    await _add_transaction(client, admin_headers, open_event["id"], "masuk", "40")
    await client.post(f"{EVENTS}/{closed_event['id']}/complete", headers=admin_headers)

    listed = await client.get(EVENTS, headers=jamaah_headers)
    assert listed.status_code == 200
    items = listed.json()
    assert [item["id"] for item in items] == [open_event["id"], closed_event["id"]]
    assert Decimal(items[0]["total_inflow"]) == Decimal("40")
    assert items[0]["total_recipients"] == 0

    completed = await client.get(EVENTS, params={"status": "selesai"}, headers=jamaah_headers)
    assert [item["id"] for item in completed.json()] == [closed_event["id"]]

    invalid = await client.get(EVENTS, params={"status": "draft"}, headers=jamaah_headers)
    assert invalid.status_code == 400


@pytest.mark.anyio
async def test_blank_idempotency_key_means_no_key(client, admin_headers):
    event = await _create_event(client, admin_headers)
    headers = {**admin_headers, "Idempotency-Key": ""}

    first = await _add_transaction(client, headers, event["id"], "masuk", "10")
    second = await _add_transaction(client, headers, event["id"], "masuk", "10")

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["id"] != second.json()["id"]
    detail = await client.get(f"{EVENTS}/{event['id']}", headers=admin_headers)
    assert len(detail.json()["transactions"]) == 2
