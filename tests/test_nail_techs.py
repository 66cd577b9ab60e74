"""Tests for nail technician endpoints and name upserts."""

import pytest
from sqlalchemy import func, select

from salonbook.core.errors import ConflictError
from salonbook.models.nail_tech import NailTech
from salonbook.services import nail_techs


@pytest.mark.asyncio
async def test_create_and_list(auth_client, client):
    response = await auth_client.post("/api/v1/nail-techs", json={"name": "  Bea "})
    assert response.status_code == 201
    assert response.json()["nailTech"]["name"] == "Bea"
    await auth_client.post("/api/v1/nail-techs", json={"name": "Amy"})

    response = await client.get("/api/v1/nail-techs")
    assert response.status_code == 200
    assert [t["name"] for t in response.json()["nailTechs"]] == ["Amy", "Bea"]


@pytest.mark.asyncio
async def test_list_is_public(client):
    response = await client.get("/api/v1/nail-techs")
    assert response.status_code == 200
    assert response.json() == {"nailTechs": []}


@pytest.mark.asyncio
async def test_create_requires_auth(client):
    response = await client.post("/api/v1/nail-techs", json={"name": "Amy"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_duplicate_name_conflicts(auth_client):
    assert (await auth_client.post("/api/v1/nail-techs", json={"name": "Amy"})).status_code == 201
    response = await auth_client.post("/api/v1/nail-techs", json={"name": "Amy "})
    assert response.status_code == 409
    assert response.json()["error"] == "A nail tech with that name already exists."


@pytest.mark.asyncio
async def test_short_name_rejected(auth_client):
    response = await auth_client.post("/api/v1/nail-techs", json={"name": " A "})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_nail_tech_conflict_raises(db):
    await nail_techs.create_nail_tech(db, "Amy")
    with pytest.raises(ConflictError):
        await nail_techs.create_nail_tech(db, "Amy")


@pytest.mark.asyncio
async def test_resolve_returns_existing(db):
    amy = await nail_techs.create_nail_tech(db, "Amy")
    resolved = await nail_techs.resolve_nail_tech(db, " Amy ")
    assert resolved.id == amy.id


@pytest.mark.asyncio
async def test_resolve_falls_back_to_concurrent_winner(db, session_factory, monkeypatch):
    """Lookup misses, a racing request has already inserted the name."""
    async with session_factory() as other:
        winner = await nail_techs.create_nail_tech(other, "Amy")

    real_lookup = nail_techs.find_nail_tech_by_name
    calls = []

    async def racing_lookup(session, name):
        calls.append(name)
        if len(calls) == 1:
            return None
        return await real_lookup(session, name)

    monkeypatch.setattr(nail_techs, "find_nail_tech_by_name", racing_lookup)

    resolved = await nail_techs.resolve_nail_tech(db, "Amy")
    assert resolved.id == winner.id
    assert len(calls) == 2

    count = (await db.execute(select(func.count(NailTech.id)))).scalar_one()
    assert count == 1
