"""
Tests for API route endpoints.

Tests: health, weapons CRUD, per-team items, agents, copy-team/reset,
item catalogs, auth guard and the error envelope.
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import json

import pytest
from services import item_catalog
from services.item_catalog import CATALOG_FILES, ItemCatalog


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.mark.api
    async def test_health_ok(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["database_connected"] is True
        assert "timestamp" in data

    @pytest.mark.api
    async def test_health_reports_db_failure(self, client, monkeypatch):
        async def failing_ping(session):
            return False

        monkeypatch.setattr("routes.health.ping_db", failing_ping)
        response = await client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestAuthGuard:

    @pytest.mark.api
    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/player/weapons"),
        ("PUT", "/api/player/weapons/2/7"),
        ("GET", "/api/player/knife/2"),
        ("GET", "/api/player/agents"),
        ("POST", "/api/player/copy-team"),
        ("POST", "/api/player/reset"),
    ])
    async def test_player_routes_require_token(self, client, method, path):
        response = await client.request(method, path, json={})
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "unauthorized"

    @pytest.mark.api
    async def test_invalid_token(self, client):
        response = await client.get(
            "/api/player/weapons", headers={"Authorization": "Bearer nope"},
        )
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid access token."


class TestWeaponRoutes:

    @pytest.mark.api
    async def test_save_then_get(self, client, auth_headers, sample_weapon_payload, steam_id):
        response = await client.put(
            "/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Weapon configuration saved successfully"
        weapon = body["weapon"]
        assert weapon["steamid"] == steam_id
        assert weapon["weaponTeam"] == 2
        assert weapon["weaponDefindex"] == 7
        assert weapon["paintId"] == 44
        assert weapon["stattrakCount"] == 1337
        assert weapon["stickers"][0]["schema"] == 0
        assert weapon["keychain"]["seed"] == 77

        response = await client.get("/api/player/weapons/2/7", headers=auth_headers)
        assert response.json()["weapon"] == weapon

    @pytest.mark.api
    async def test_list(self, client, auth_headers, sample_weapon_payload):
        await client.put("/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers)
        await client.put("/api/player/weapons/3/7", json=sample_weapon_payload, headers=auth_headers)

        response = await client.get("/api/player/weapons", headers=auth_headers)
        assert response.status_code == 200
        assert [w["weaponTeam"] for w in response.json()["weapons"]] == [2, 3]

    @pytest.mark.api
    async def test_players_see_only_their_own(self, client, auth_headers, other_auth_headers, sample_weapon_payload):
        await client.put("/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers)

        response = await client.get("/api/player/weapons", headers=other_auth_headers)
        assert response.json() == {"weapons": []}

    @pytest.mark.api
    async def test_missing_weapon_is_null(self, client, auth_headers):
        response = await client.get("/api/player/weapons/2/7", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"weapon": None}

    @pytest.mark.api
    async def test_validation_error_envelope(self, client, auth_headers, sample_weapon_payload):
        sample_weapon_payload["stickers"][0]["rotation"] = 400
        response = await client.put(
            "/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": {
                "code": "validation",
                "message": "Sticker 1: Sticker rotation must be between 0 and 360",
                "details": {},
            },
        }

    @pytest.mark.api
    async def test_too_many_stickers(self, client, auth_headers, sample_weapon_payload, sample_sticker):
        sample_weapon_payload["stickers"] = [sample_sticker] * 6
        response = await client.put(
            "/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Maximum 5 stickers allowed per weapon"

    @pytest.mark.api
    async def test_oversized_keychain_offset(self, client, auth_headers, sample_weapon_payload):
        sample_weapon_payload["keychain"]["x"] = 10**400
        response = await client.put(
            "/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Keychain x offset must be a number"

    @pytest.mark.api
    async def test_invalid_team_in_path(self, client, auth_headers, sample_weapon_payload):
        response = await client.put(
            "/api/player/weapons/4/7", json=sample_weapon_payload, headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Team value must be 2 (Terrorist) or 3 (Counter-Terrorist)"
        )

    @pytest.mark.api
    async def test_delete(self, client, auth_headers, sample_weapon_payload):
        await client.put("/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers)

        response = await client.delete("/api/player/weapons/2/7", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Weapon configuration deleted successfully"}

        response = await client.delete("/api/player/weapons/2/7", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "notfound"
        assert response.json()["error"]["message"] == "Weapon configuration not found"


class TestTeamItemRoutes:

    @pytest.mark.api
    @pytest.mark.parametrize("path,body,key,field,value", [
        ("knife", {"knife": "weapon_knife_karambit"}, "knife", "knife", "weapon_knife_karambit"),
        ("gloves", {"defindex": 5030}, "gloves", "defindex", 5030),
        ("music", {"musicId": 3}, "music", "musicId", 3),
        ("pins", {"pinId": 1001}, "pin", "pinId", 1001),
    ])
    async def test_put_get_delete(self, client, auth_headers, path, body, key, field, value):
        response = await client.get(f"/api/player/{path}/3", headers=auth_headers)
        assert response.json() == {key: None}

        response = await client.put(f"/api/player/{path}/3", json=body, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()[key][field] == value
        assert response.json()["message"].endswith("configuration saved successfully")

        response = await client.get(f"/api/player/{path}/3", headers=auth_headers)
        assert response.json()[key][field] == value
        assert response.json()[key]["team"] == 3

        response = await client.delete(f"/api/player/{path}/3", headers=auth_headers)
        assert response.status_code == 200

        response = await client.delete(f"/api/player/{path}/3", headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.api
    async def test_invalid_knife(self, client, auth_headers):
        response = await client.put("/api/player/knife/2", json={"knife": ""}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Knife must be a string"

    @pytest.mark.api
    async def test_gloves_message(self, client, auth_headers):
        response = await client.delete("/api/player/gloves/2", headers=auth_headers)
        assert response.json()["error"]["message"] == "Gloves configuration not found"


class TestAgentRoutes:

    @pytest.mark.api
    async def test_empty(self, client, auth_headers):
        response = await client.get("/api/player/agents", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["agents"]["agentCT"] is None
        assert response.json()["agents"]["agentT"] is None

    @pytest.mark.api
    async def test_set_both_sides_and_clear_one(self, client, auth_headers, steam_id):
        response = await client.put("/api/player/agents/3", json={"agent": "ctm_sas"}, headers=auth_headers)
        assert response.json()["agent"] == {"steamid": steam_id, "team": 3, "agent": "ctm_sas"}
        await client.put("/api/player/agents/2", json={"agent": "tm_phoenix"}, headers=auth_headers)

        agents = (await client.get("/api/player/agents", headers=auth_headers)).json()["agents"]
        assert agents["agentCT"] == "ctm_sas"
        assert agents["agentT"] == "tm_phoenix"

        response = await client.delete("/api/player/agents/3", headers=auth_headers)
        assert response.status_code == 200
        agents = (await client.get("/api/player/agents", headers=auth_headers)).json()["agents"]
        assert agents["agentCT"] is None
        assert agents["agentT"] == "tm_phoenix"

    @pytest.mark.api
    async def test_delete_without_row(self, client, auth_headers):
        response = await client.delete("/api/player/agents/2", headers=auth_headers)
        assert response.status_code == 404


class TestBulkRoutes:

    @pytest.mark.api
    async def test_copy_team(self, client, auth_headers, sample_weapon_payload):
        await client.put("/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers)

        response = await client.post(
            "/api/player/copy-team",
            json={"sourceTeam": 2, "targetTeam": 3, "categories": ["weapons", "knife"]},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == {
            "message": "Configuration copied successfully",
            "copiedCategories": ["weapons"],
            "sourceTeam": 2,
            "targetTeam": 3,
        }

        response = await client.get("/api/player/weapons/3/7", headers=auth_headers)
        assert response.json()["weapon"]["paintId"] == 44

    @pytest.mark.api
    async def test_copy_team_same_side(self, client, auth_headers):
        response = await client.post(
            "/api/player/copy-team",
            json={"sourceTeam": 3, "targetTeam": 3, "categories": ["weapons"]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Source and target teams must be different"

    @pytest.mark.api
    async def test_reset_all(self, client, auth_headers, sample_weapon_payload):
        await client.put("/api/player/weapons/2/7", json=sample_weapon_payload, headers=auth_headers)
        await client.put("/api/player/weapons/3/7", json=sample_weapon_payload, headers=auth_headers)

        response = await client.post(
            "/api/player/reset", json={"categories": ["weapons"]}, headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["team"] == "all"
        assert response.json()["resetCategories"] == ["weapons"]

        response = await client.get("/api/player/weapons", headers=auth_headers)
        assert response.json() == {"weapons": []}

    @pytest.mark.api
    async def test_reset_unknown_category(self, client, auth_headers):
        response = await client.post(
            "/api/player/reset", json={"categories": ["nope"]}, headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Unknown category: nope"


class TestItemRoutes:

    @pytest.fixture
    def test_catalog(self, tmp_path, monkeypatch):
        (tmp_path / CATALOG_FILES["skins"]).write_text(
            json.dumps([{"weapon_defindex": 7, "paint": 44}]), encoding="utf-8",
        )
        catalog = ItemCatalog(str(tmp_path))
        monkeypatch.setattr("routes.items.catalog", catalog)
        return catalog

    @pytest.mark.api
    async def test_skins(self, client, test_catalog):
        response = await client.get("/api/items/skins")
        assert response.status_code == 200
        assert response.json() == {"skins": [{"weapon_defindex": 7, "paint": 44}]}

    @pytest.mark.api
    async def test_missing_catalog_is_503(self, client, test_catalog):
        response = await client.get("/api/items/music")
        assert response.status_code == 503
        assert response.json()["error"]["message"] == "Failed to fetch music kits"

    @pytest.mark.api
    async def test_status(self, client, test_catalog):
        await client.get("/api/items/skins")
        response = await client.get("/api/items/status")
        assert response.status_code == 200
        assert response.json()["skins"]["count"] == 1
        assert response.json()["pins"]["cached"] is False

    @pytest.mark.unit
    def test_module_catalog_exists(self):
        assert isinstance(item_catalog.catalog, ItemCatalog)
