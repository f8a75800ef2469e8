"""Tests for the saved-design HTTP endpoints and their JSON file store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sticker_designer.server import create_app
from sticker_designer.services.design_store import DesignStore, DesignStoreError


@pytest.fixture
def designs_file(tmp_path: Path) -> Path:
    return tmp_path / "saved-designs.json"


@pytest.fixture
def client(designs_file: Path):
    ticks = iter(range(1000, 2000))
    store = DesignStore(designs_file, clock=lambda: next(ticks))
    app = create_app(store=store)
    app.config["TESTING"] = True
    return app.test_client()


def test_list_is_empty_without_file(client, designs_file: Path):
    response = client.get("/api/designs")
    assert response.status_code == 200
    assert response.get_json() == []
    assert not designs_file.exists()


def test_save_appends_record(client, designs_file: Path):
    stickers = [{"type": "text_label", "text": "Hi", "left": 400, "top": 250}]

    response = client.post("/api/save-design", json={"stickers": stickers})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Design saved!"}
    stored = json.loads(designs_file.read_text(encoding="utf-8"))
    assert stored == [{"id": 1000, "stickers": stickers}]
    assert client.get("/api/designs").get_json() == stored


def test_saves_accumulate_in_order(client):
    for index in range(3):
        assert client.post("/api/save-design", json={"stickers": [{"n": index}]}).status_code == 200

    designs = client.get("/api/designs").get_json()
    assert [record["stickers"][0]["n"] for record in designs] == [0, 1, 2]
    assert [record["id"] for record in designs] == [1000, 1001, 1002]


def test_file_is_pretty_printed(client, designs_file: Path):
    client.post("/api/save-design", json={"stickers": []})
    assert designs_file.read_text(encoding="utf-8").startswith("[\n  {")


def test_empty_list_is_accepted(client):
    response = client.post("/api/save-design", json={"stickers": []})
    assert response.status_code == 200
    assert client.get("/api/designs").get_json()[0]["stickers"] == []


@pytest.mark.parametrize(
    "payload",
    [{}, {"stickers": None}, {"stickers": ""}, {"other": [1]}],
)
def test_missing_stickers_is_rejected(client, designs_file: Path, payload):
    response = client.post("/api/save-design", json=payload)

    assert response.status_code == 400
    assert response.get_json() == {"error": "No stickers data"}
    assert not designs_file.exists()


def test_rejection_leaves_existing_file_untouched(client, designs_file: Path):
    client.post("/api/save-design", json={"stickers": [{"n": 1}]})
    before = designs_file.read_bytes()

    assert client.post("/api/save-design", json={}).status_code == 400
    assert designs_file.read_bytes() == before


def test_non_json_body_is_rejected(client):
    response = client.post("/api/save-design", data="stickers", content_type="text/plain")
    assert response.status_code == 400


def test_corrupt_file_reports_server_error(client, designs_file: Path):
    designs_file.write_text("{not json", encoding="utf-8")

    assert client.get("/api/designs").status_code == 500
    response = client.post("/api/save-design", json={"stickers": [1]})
    assert response.status_code == 500
    assert "error" in response.get_json()
    assert designs_file.read_text(encoding="utf-8") == "{not json"


def test_store_rejects_non_array_document(tmp_path: Path):
    path = tmp_path / "designs.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    with pytest.raises(DesignStoreError, match="JSON array"):
        DesignStore(path).list_designs()


def test_create_app_with_designs_file(tmp_path: Path):
    path = tmp_path / "nested" / "designs.json"
    app = create_app(designs_file=path)

    response = app.test_client().post("/api/save-design", json={"stickers": [{"n": 1}]})

    assert response.status_code == 200
    record = json.loads(path.read_text(encoding="utf-8"))[0]
    assert isinstance(record["id"], int)
    assert record["stickers"] == [{"n": 1}]
