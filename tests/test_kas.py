"""Mosque cash ledger endpoints."""
from decimal import Decimal

import pytest

KAS = "/api/v1/kas"


async def _create_entry(client, headers, type_="masuk", amount="100", tanggal="2026-02-01", **fields):
    payload = {"type": type_, "amount": amount, "description": "Infaq Jumat", "tanggal": tanggal}
    payload.update(fields)
    response = await client.post(KAS, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.anyio
async def test_list_returns_entries_newest_first_with_summary(client, admin_headers, jamaah_headers):
    await _create_entry(client, admin_headers, amount="500", tanggal="2026-01-05", category="Infaq")
    await _create_entry(client, admin_headers, type_="keluar", amount="120.75", tanggal="2026-01-20")

    response = await client.get(KAS, headers=jamaah_headers)

    assert response.status_code == 200
    body = response.json()
    assert [item["tanggal"] for item in body["data"]] == ["2026-01-20", "2026-01-05"]
    assert Decimal(body["summary"]["total_inflow"]) == Decimal("500")
    assert Decimal(body["summary"]["total_outflow"]) == Decimal("120.75")
    assert Decimal(body["summary"]["balance"]) == Decimal("379.25")


@pytest.mark.anyio
async def test_filters_do_not_change_summary(client, admin_headers):
    await _create_entry(client, admin_headers, amount="50", tanggal="2026-01-01")
    await _create_entry(client, admin_headers, type_="keluar", amount="20", tanggal="2026-02-01")
    await _create_entry(client, admin_headers, amount="30", tanggal="2026-03-01")

    response = await client.get(
        KAS,
        params={"start_date": "2026-01-15", "end_date": "2026-03-31", "type": "masuk"},
        headers=admin_headers,
    )

    body = response.json()
    assert [Decimal(item["amount"]) for item in body["data"]] == [Decimal("30")]
    assert Decimal(body["summary"]["balance"]) == Decimal("60")


@pytest.mark.anyio
async def test_inverted_date_range_is_invalid(client, admin_headers):
    response = await client.get(
        KAS, params={"start_date": "2026-03-01", "end_date": "2026-01-01"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.anyio
async def test_update_and_delete_entry(client, admin_headers):
    entry = await _create_entry(client, admin_headers)

    updated = await client.put(
        f"{KAS}/{entry['id']}",
        json={"type": "keluar", "amount": "80", "description": "Bayar listrik", "category": "", "tanggal": "2026-02-02"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["type"] == "keluar"
    assert updated.json()["category"] is None

    assert (await client.delete(f"{KAS}/{entry['id']}", headers=admin_headers)).status_code == 204
    missing = await client.delete(f"{KAS}/{entry['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "KAS_ENTRY_NOT_FOUND"


@pytest.mark.anyio
async def test_create_entry_rejects_non_positive_amount(client, admin_headers):
    response = await client.post(
        KAS,
        json={"type": "masuk", "amount": "0", "description": "Nol", "tanggal": "2026-02-01"},
        headers=admin_headers,
    )

    assert response.status_code == 400


@pytest.mark.anyio
async def test_create_entry_idempotency_key(client, admin_headers):
    headers = {**admin_headers, "Idempotency-Key": "kas-001"}

    first = await _create_entry(client, headers)
    second = await _create_entry(client, headers)

    assert first["id"] == second["id"]
    listed = await client.get(KAS, headers=admin_headers)
    assert len(listed.json()["data"]) == 1


@pytest.mark.anyio
async def test_jamaah_cannot_write(client, jamaah_headers):
    response = await client.post(
        KAS,
        json={"type": "masuk", "amount": "10", "description": "Infaq", "tanggal": "2026-02-01"},
        headers=jamaah_headers,
    )

    assert response.status_code == 403


@pytest.mark.anyio
async def test_blank_idempotency_key_means_no_key(client, admin_headers):
    headers = {**admin_headers, "Idempotency-Key": ""}

    first = await _create_entry(client, headers)
    second = await _create_entry(client, headers)

    assert first["id"] != second["id"]
    listed = await client.get(KAS, headers=admin_headers)
    assert len(listed.json()["data"]) == 2
