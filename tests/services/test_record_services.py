"""Tests for the equipment, intervention and location services."""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from app.exceptions import BusinessRuleError, ConflictError, NotFoundError
from app.models.equipment import Equipment
from app.schemas.equipment import EquipmentCreate, EquipmentUpdate
from app.schemas.intervention import InterventionCreate
from app.services.equipment_service import EquipmentService, utcnow
from app.services.intervention_service import InterventionService
from app.services.location_service import LocationService


class TestEquipmentService:
    """Tests for EquipmentService."""

    @pytest.mark.asyncio
    async def test_create_sets_entry_date(self, test_db):
        equipment = await EquipmentService(test_db).create_equipment(
            EquipmentCreate(patrimony="AC00001", initial_location="Sala 1")
        )
        assert equipment.id is not None
        assert equipment.entry_date is not None

    @pytest.mark.asyncio
    async def test_duplicate_patrimony_rejected(self, test_db, registered_equipment):
        service = EquipmentService(test_db)
        with pytest.raises(ConflictError) as exc_info:
            await service.create_equipment(EquipmentCreate(patrimony="AC00001", initial_location="Sala 9"))

        assert "already registered" in exc_info.value.detail
        count = (await test_db.execute(
            select(func.count()).select_from(Equipment).where(Equipment.patrimony == "AC00001")
        )).scalar()
        assert count == 1

    @pytest.mark.asyncio
    async def test_patrimony_check_is_case_sensitive(self, test_db, registered_equipment):
        equipment = await EquipmentService(test_db).create_equipment(
            EquipmentCreate(patrimony="ac00001", initial_location="Sala 9")
        )
        assert equipment.patrimony == "ac00001"

    @pytest.mark.asyncio
    async def test_update(self, test_db, registered_equipment):
        target = registered_equipment[0]
        updated = await EquipmentService(test_db).update_equipment(
            target.id, EquipmentUpdate(brand="Springer", initial_location="Sala 5")
        )
        assert updated.brand == "Springer"
        assert updated.initial_location == "Sala 5"
        assert updated.patrimony == "AC00001"

    @pytest.mark.asyncio
    async def test_update_to_taken_patrimony(self, test_db, registered_equipment):
        with pytest.raises(ConflictError) as exc_info:
            await EquipmentService(test_db).update_equipment(
                registered_equipment[0].id, EquipmentUpdate(patrimony="AC00002")
            )
        assert "already registered to another equipment" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_db):
        with pytest.raises(NotFoundError):
            await EquipmentService(test_db).update_equipment(999, EquipmentUpdate(brand="LG"))

    @pytest.mark.asyncio
    async def test_list_ordered_by_patrimony(self, test_db, registered_equipment):
        await EquipmentService(test_db).create_equipment(EquipmentCreate(patrimony="AA00009", initial_location="X"))
        items = await EquipmentService(test_db).list_equipment()
        assert [e.patrimony for e in items] == ["AA00009", "AC00001", "AC00002"]


class TestInterventionService:
    """Tests for InterventionService."""

    @pytest.mark.asyncio
    async def test_unknown_patrimony_rejected(self, test_db):
        with pytest.raises(BusinessRuleError) as exc_info:
            await InterventionService(test_db).create_intervention(
                InterventionCreate(patrimony="XX00000", type="reclamacao")
            )
        assert exc_info.value.detail == "Equipment not found."

    @pytest.mark.asyncio
    async def test_create_defaults(self, test_db, registered_equipment):
        intervention = await InterventionService(test_db).create_intervention(
            InterventionCreate(patrimony="AC00001", type="reclamacao", description="Barulho")
        )
        assert intervention.type == "reclamacao"
        assert intervention.cost == 0
        assert intervention.start_date is not None

    @pytest.mark.asyncio
    async def test_history_most_recent_first(self, test_db, registered_equipment):
        service = InterventionService(test_db)
        for day in (5, 20, 10):
            await service.create_intervention(
                InterventionCreate(patrimony="AC00001", type="reclamacao", start_date=datetime(2024, 1, day))
            )
        history = await EquipmentService(test_db).history("AC00001")
        assert [i.start_date.day for i in history] == [20, 10, 5]

    @pytest.mark.asyncio
    async def test_scheduled_events(self, test_db, registered_equipment):
        service = InterventionService(test_db)
        now = utcnow()
        later = await service.create_intervention(InterventionCreate(
            patrimony="AC00001", type="manutencao-preventiva", start_date=now + timedelta(days=10)
        ))
        sooner = await service.create_intervention(InterventionCreate(
            patrimony="AC00002", type="manutencao-preventiva", start_date=now + timedelta(days=2)
        ))
        # closed or past interventions are not scheduled
        await service.create_intervention(InterventionCreate(
            patrimony="AC00001", type="reserva", start_date=now + timedelta(days=3),
            end_date=now + timedelta(days=4),
        ))
        await service.create_intervention(InterventionCreate(
            patrimony="AC00001", type="reclamacao", start_date=now - timedelta(days=1)
        ))

        events = await service.scheduled_events(now)
        assert [e.id for e in events] == [sooner.id, later.id]
        assert events[0].patrimony == "AC00002"
        assert events[0].scheduled_date == sooner.start_date

    @pytest.mark.asyncio
    async def test_get_missing(self, test_db):
        with pytest.raises(NotFoundError):
            await InterventionService(test_db).get_intervention(42)


class TestLocationService:
    """Tests for LocationService."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_db):
        service = LocationService(test_db)
        await service.create_location(" Sala B ")
        await service.create_location("Sala A")
        assert [loc.name for loc in await service.list_locations()] == ["Sala A", "Sala B"]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, test_db):
        service = LocationService(test_db)
        await service.create_location("Sala A")
        with pytest.raises(ConflictError):
            await service.create_location("Sala A")

    @pytest.mark.asyncio
    async def test_ensure_locations_skips_known(self, test_db):
        service = LocationService(test_db)
        await service.create_location("Sala A")
        created = await service.ensure_locations(["Sala A", "Sala B", "Sala B", ""])
        assert created == ["Sala B"]
