"""
Tests for the equipment API endpoints (/api/v2/equipment).
"""
import pytest
from httpx import AsyncClient

from tests.factories import EquipmentFactory, InterventionFactory, WindowEquipmentFactory

PREFIX = "/api/v2/equipment"


class TestCreateEquipment:
    """Tests for POST /equipment."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient):
        payload = EquipmentFactory(patrimony="AC12345")
        response = await client.post(PREFIX, json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["patrimony"] == "AC12345"
        assert data["brand"] == payload["brand"]
        assert data["entry_date"] is not None

    @pytest.mark.asyncio
    async def test_create_window_unit(self, client: AsyncClient):
        response = await client.post(PREFIX, json=WindowEquipmentFactory(patrimony="JN00001"))

        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "janela"
        assert data["power"] == 7500.0

    @pytest.mark.asyncio
    async def test_duplicate_patrimony(self, client: AsyncClient):
        payload = EquipmentFactory(patrimony="AC12345")
        first = await client.post(PREFIX, json=payload)
        second = await client.post(PREFIX, json=payload)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.headers["content-type"].startswith("application/problem+json")
        assert "already registered" in second.json()["detail"]

        listing = await client.get(PREFIX)
        assert listing.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_invalid_patrimony(self, client: AsyncClient):
        response = await client.post(PREFIX, json=EquipmentFactory(patrimony="AC 12"))

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VAL_001"
        assert any("patrimony" in err["field"] for err in body["errors"])


class TestReadEquipment:
    """Tests for the equipment read endpoints."""

    @pytest.mark.asyncio
    async def test_list_ordered_by_patrimony(self, client: AsyncClient):
        for patrimony in ("BX00002", "AC00001"):
            await client.post(PREFIX, json=EquipmentFactory(patrimony=patrimony))

        response = await client.get(PREFIX)
        assert response.status_code == 200
        assert [item["patrimony"] for item in response.json()["items"]] == ["AC00001", "BX00002"]

    @pytest.mark.asyncio
    async def test_get_by_patrimony(self, client: AsyncClient):
        await client.post(PREFIX, json=EquipmentFactory(patrimony="AC00001"))

        response = await client.get(f"{PREFIX}/AC00001")
        assert response.status_code == 200
        assert response.json()["patrimony"] == "AC00001"

    @pytest.mark.asyncio
    async def test_get_missing(self, client: AsyncClient):
        response = await client.get(f"{PREFIX}/ZZ00000")
        assert response.status_code == 404
        assert response.json()["code"] == "RES_001"

    @pytest.mark.asyncio
    async def test_history(self, client: AsyncClient):
        await client.post(PREFIX, json=EquipmentFactory(patrimony="AC00001"))
        for start in ("2024-01-05T10:00:00", "2024-03-05T10:00:00"):
            await client.post(
                "/api/v2/interventions",
                json=InterventionFactory(patrimony="AC00001", start_date=start),
            )

        response = await client.get(f"{PREFIX}/AC00001/interventions")
        assert response.status_code == 200
        dates = [item["start_date"] for item in response.json()["items"]]
        assert dates == ["2024-03-05T10:00:00", "2024-01-05T10:00:00"]


class TestUpdateEquipment:
    """Tests for PATCH /equipment/{id}."""

    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient):
        created = (await client.post(PREFIX, json=EquipmentFactory(patrimony="AC00001"))).json()

        response = await client.patch(f"{PREFIX}/{created['id']}", json={"brand": "Springer"})
        assert response.status_code == 200
        assert response.json()["brand"] == "Springer"
        assert response.json()["patrimony"] == "AC00001"

    @pytest.mark.asyncio
    async def test_update_to_existing_patrimony(self, client: AsyncClient):
        await client.post(PREFIX, json=EquipmentFactory(patrimony="AC00001"))
        second = (await client.post(PREFIX, json=EquipmentFactory(patrimony="AC00002"))).json()

        response = await client.patch(f"{PREFIX}/{second['id']}", json={"patrimony": "AC00001"})
        assert response.status_code == 409
        assert "already registered to another equipment" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_update_missing(self, client: AsyncClient):
        response = await client.patch(f"{PREFIX}/999", json={"brand": "LG"})
        assert response.status_code == 404
