"""Tests for settings API endpoints."""

from __future__ import annotations

import json


class TestSettingsAPI:
    async def test_defaults(self, client):
        resp = await client.get("/api/settings")
        assert resp.status_code == 200
        data = resp.json()
        assert data["refresh_interval_minutes"] == 5
        assert data["max_flights_per_request"] == 10
        assert data["radius_km"] == 50.0
        assert data["demo_mode"] is False

    async def test_partial_update_persisted(self, client, tmp_path):
        resp = await client.patch("/api/settings", json={"radius_km": 80})
        assert resp.status_code == 200
        assert resp.json()["radius_km"] == 80
        assert resp.json()["max_flights_per_request"] == 10

        stored = json.loads((tmp_path / "settings.json").read_text())
        assert stored["radius_km"] == 80
        assert (await client.get("/api/settings")).json()["radius_km"] == 80

    async def test_invalid_value_rejected(self, client):
        resp = await client.patch("/api/settings", json={"refresh_interval_minutes": 0})
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"] == ["refresh_interval_minutes"]
        assert (await client.get("/api/settings")).json()["refresh_interval_minutes"] == 5

    async def test_unknown_key_rejected(self, client):
        resp = await client.patch("/api/settings", json={"poll_every": 3})
        assert resp.status_code == 422

    async def test_non_object_body_rejected(self, client):
        resp = await client.patch("/api/settings", json=[1, 2])
        assert resp.status_code == 422

    async def test_unwritable_store_keeps_settings(self, client, test_app, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        test_app.state.context.settings_store.path = blocker / "settings.json"

        resp = await client.patch("/api/settings", json={"demo_mode": True})
        assert resp.status_code == 500
        assert (await client.get("/api/settings")).json()["demo_mode"] is False
