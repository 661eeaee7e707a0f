from dataclasses import FrozenInstanceError

import pytest

from cryptforge import create_app
from cryptforge.dungeon import PRESETS, GenerationParams
from cryptforge.routes import dungeon_api


def test_presets_endpoint(client):
    resp = client.get("/api/dungeon/presets")
    assert resp.status_code == 200
    data = resp.get_json()
    assert set(data) == set(PRESETS)
    assert data["cave"]["hallway_style"] == "organic"
    assert data["small"]["width"] == 30


def test_generate_with_seed(client):
    resp = client.post("/api/dungeon/generate", json={"seed": "abc", "width": 30, "height": 30, "numRooms": 5})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["seed"] == "abc"
    assert data["width"] == 30 and data["height"] == 30
    assert len(data["grid"]) == 30 and all(len(row) == 30 for row in data["grid"])
    assert 1 <= len(data["rooms"]) <= 5
    assert len(data["corridors"]) == len(data["rooms"]) - 1


def test_generate_is_cached_for_seeded_requests(client):
    body = {"seed": 99, "preset": "small"}
    first = client.post("/api/dungeon/generate", json=body).get_json()
    assert len(dungeon_api._dungeon_cache) == 1
    second = client.post("/api/dungeon/generate", json=body).get_json()
    assert first == second


def test_seedless_requests_bypass_cache(client):
    resp = client.post("/api/dungeon/generate", json={"preset": "small"})
    assert resp.status_code == 200
    assert isinstance(resp.get_json()["seed"], int)
    assert dungeon_api._dungeon_cache == {}


def test_cache_evicts_oldest(client, test_app, monkeypatch):
    monkeypatch.setitem(test_app.config, "CRYPTFORGE_CACHE_SIZE", 2)
    for seed in (1, 2, 3):
        client.post("/api/dungeon/generate", json={"seed": seed, "preset": "small"})
    assert len(dungeon_api._dungeon_cache) == 2
    seeds = {dict(key[:-1])["seed"] for key in dungeon_api._dungeon_cache}
    assert seeds == {2, 3}


def test_generate_rejects_non_object_body(client):
    resp = client.post("/api/dungeon/generate", json=[1, 2, 3])
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_generate_rejects_bad_values(client):
    assert client.post("/api/dungeon/generate", json={"width": "wide"}).status_code == 400
    assert client.post("/api/dungeon/generate", json={"preset": "dragon-lair"}).status_code == 400
    resp = client.post("/api/dungeon/generate", json={"width": 500})
    assert resp.status_code == 400
    assert "120" in resp.get_json()["error"]


def test_non_finite_numbers_are_bad_requests(client):
    resp = client.post("/api/dungeon/generate", data='{"width": 1e400, "seed": 1}', content_type="application/json")
    assert resp.status_code == 400
    assert "width" in resp.get_json()["error"]
    assert client.get("/api/dungeon/ascii?width=inf&seed=1").status_code == 400
    assert client.get("/api/dungeon/ascii?seed=nan&width=30").status_code == 200


def test_cached_dungeon_cannot_be_altered(client):
    dungeon_api.clear_dungeon_cache()
    d = dungeon_api.get_cached_dungeon(GenerationParams(seed=7))
    with pytest.raises(FrozenInstanceError):
        d.rooms[0].description = "tampered"
    with pytest.raises(FrozenInstanceError):
        d.rooms[0].cells = ()
    with pytest.raises(TypeError):
        d.metrics["rooms_placed"] = -1
    with pytest.raises(TypeError):
        d.params["width"] = 1
    again = dungeon_api.get_cached_dungeon(GenerationParams(seed=7))
    assert again is d
    assert again.metrics["rooms_placed"] == len(again.rooms)


def test_ascii_endpoint(client):
    resp = client.get("/api/dungeon/ascii?seed=abc&width=30&height=20&num_rooms=5")
    assert resp.status_code == 200
    assert resp.mimetype == "text/plain"
    assert resp.headers["X-Dungeon-Seed"] == "abc"
    lines = resp.get_data(as_text=True).rstrip("\n").split("\n")
    assert len(lines) == 20
    assert all(len(line) == 30 for line in lines)


def test_ascii_matches_json_grid(client):
    text = client.get("/api/dungeon/ascii?seed=5&preset=small").get_data(as_text=True)
    data = client.post("/api/dungeon/generate", json={"seed": 5, "preset": "small"}).get_json()
    walls = [[v == data["legend"]["wall"] for v in row] for row in data["grid"]]
    assert walls == [[ch == "#" for ch in line] for line in text.rstrip("\n").split("\n")]


def test_unhandled_errors_return_error_id(tmp_path):
    app = create_app()
    app.instance_path = str(tmp_path)

    @app.route("/boom")
    def boom():
        raise RuntimeError("kaboom")

    resp = app.test_client().get("/boom")
    assert resp.status_code == 500
    data = resp.get_json()
    assert data["error"] == "internal server error"
    assert len(data["error_id"]) == 8
