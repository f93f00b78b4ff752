"""Assigning astronauts to missions."""

import pytest

from missioncontrol.errors import AccessDeniedError, ConflictError, ErrorKind, ValidationError

SPOCK = {"name_first": "Spock", "name_last": "Grayson", "rank": "Commander", "age": 40, "weight": 80, "height": 185}


async def test_assign_shows_on_both_sides(app, token, mission_id, astronaut_id):
    await app.assign_astronaut(token, mission_id, astronaut_id)

    info = await app.get_astronaut(token, astronaut_id)
    assert info.assigned_mission.mission_id == mission_id
    assert info.assigned_mission.objective == "[Mars] Mars Run"

    mission = await app.get_mission(token, mission_id)
    assert [(a.astronaut_id, a.name) for a in mission.assigned_astronauts] == [(astronaut_id, "Captain Jim Kirk")]

    pool = await app.list_astronaut_pool(token)
    assert [entry.assigned for entry in pool] == [True]


async def test_crew_listed_in_assignment_order(app, token, mission_id, astronaut_id):
    spock = await app.create_astronaut(token, **SPOCK)
    await app.assign_astronaut(token, mission_id, spock)
    await app.assign_astronaut(token, mission_id, astronaut_id)

    mission = await app.get_mission(token, mission_id)
    assert [a.astronaut_id for a in mission.assigned_astronauts] == [spock, astronaut_id]


async def test_astronaut_on_one_mission_at_most(app, token, other_token, mission_id, astronaut_id):
    same_owner_mission = await app.create_mission(token, "Venus Run", "", "Venus")
    other_mission = await app.create_mission(other_token, "Moon Walk", "", "Moon")
    await app.assign_astronaut(token, mission_id, astronaut_id)

    for caller, target in ((token, mission_id), (token, same_owner_mission), (other_token, other_mission)):
        with pytest.raises(ConflictError) as exc_info:
            await app.assign_astronaut(caller, target, astronaut_id)
        assert exc_info.value.kind == ErrorKind.ALREADY_ASSIGNED

    assert (await app.get_mission(other_token, other_mission)).assigned_astronauts == []
    assert (await app.get_mission(token, same_owner_mission)).assigned_astronauts == []


async def test_reassign_after_unassign(app, token, mission_id, astronaut_id):
    second = await app.create_mission(token, "Moon Walk", "", "Moon")
    await app.assign_astronaut(token, mission_id, astronaut_id)
    await app.unassign_astronaut(token, mission_id, astronaut_id)
    await app.assign_astronaut(token, second, astronaut_id)

    info = await app.get_astronaut(token, astronaut_id)
    assert info.assigned_mission.mission_id == second
    assert (await app.get_mission(token, mission_id)).assigned_astronauts == []


async def test_ownership_checked_before_astronaut(app, token, other_token, mission_id):
    with pytest.raises(AccessDeniedError):
        await app.assign_astronaut(other_token, mission_id, 999)


async def test_unknown_astronaut(app, token, mission_id):
    with pytest.raises(ValidationError) as exc_info:
        await app.assign_astronaut(token, mission_id, 999)
    assert exc_info.value.kind == ErrorKind.ASTRONAUT_ID_INVALID


async def test_unassign_astronaut_not_on_mission(app, token, mission_id, astronaut_id):
    second = await app.create_mission(token, "Moon Walk", "", "Moon")
    await app.assign_astronaut(token, second, astronaut_id)

    with pytest.raises(ValidationError) as exc_info:
        await app.unassign_astronaut(token, mission_id, astronaut_id)
    assert exc_info.value.kind == ErrorKind.NOT_ASSIGNED

    info = await app.get_astronaut(token, astronaut_id)
    assert info.assigned_mission.mission_id == second
