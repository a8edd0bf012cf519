import json
import logging

import pytest

from halodkm.core.logging import setup_logging


def test_setup_logging_emits_json(capsys):
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        setup_logging("info")
        logging.getLogger("halodkm.services.events").info("Event completed", extra={"event_id": 5})
        line = capsys.readouterr().err.strip().splitlines()[-1]
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)

    record = json.loads(line)
    assert record["message"] == "Event completed"
    assert record["event_id"] == 5
    assert record["levelname"] == "INFO"


@pytest.mark.anyio
async def test_metrics_endpoint(client, jamaah_headers):
    await client.get("/api/v1/events", headers=jamaah_headers)

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "starlette_requests_total" in response.text
