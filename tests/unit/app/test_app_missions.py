"""Mission ownership, naming and transfer."""

import pytest

from missioncontrol.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    ErrorKind,
    InvariantViolationError,
    ValidationError,
)


class TestCreateMission:
    async def test_create_and_get(self, app, token, mission_id):
        info = await app.get_mission(token, mission_id)

        assert info.mission_id == mission_id == 1
        assert (info.name, info.description, info.target) == ("Mars Run", "desc", "Mars")
        assert info.assigned_astronauts == []
        assert info.time_created == info.time_last_edited

    async def test_names_unique_per_owner(self, app, token, other_token, mission_id):
        with pytest.raises(ConflictError) as exc_info:
            await app.create_mission(token, "Mars Run", "", "")
        assert exc_info.value.kind == ErrorKind.MISSION_NAME_IN_USE

        assert await app.create_mission(other_token, "Mars Run", "", "") == mission_id + 1
        assert await app.create_mission(token, "mars run", "", "") == mission_id + 2

    async def test_list_only_own_missions(self, app, token, other_token, mission_id):
        await app.create_mission(other_token, "Moon Walk", "", "Moon")

        missions = await app.list_missions(token)
        assert [(m.mission_id, m.name) for m in missions] == [(mission_id, "Mars Run")]


class TestOwnership:
    async def test_foreign_and_missing_missions_look_the_same(self, app, token, other_token, mission_id):
        for caller, target in ((other_token, mission_id), (token, 999)):
            with pytest.raises(AccessDeniedError) as exc_info:
                await app.get_mission(caller, target)
            assert exc_info.value.kind == ErrorKind.NOT_OWNER

    async def test_field_validation_before_ownership(self, app, other_token, mission_id):
        with pytest.raises(ValidationError) as exc_info:
            await app.update_mission_target(other_token, mission_id, "t" * 101)
        assert exc_info.value.kind == ErrorKind.TARGET_TOO_LONG


class TestUpdateMission:
    async def test_updates(self, app, token, mission_id):
        await app.update_mission_name(token, mission_id, "Venus Run")
        await app.update_mission_description(token, mission_id, "new description")
        await app.update_mission_target(token, mission_id, "Venus")

        info = await app.get_mission(token, mission_id)
        assert (info.name, info.description, info.target) == ("Venus Run", "new description", "Venus")
        assert info.time_last_edited >= info.time_created

    async def test_rename_to_own_name_allowed(self, app, token, mission_id):
        await app.update_mission_name(token, mission_id, "Mars Run")

    async def test_rename_to_other_owned_name(self, app, token, mission_id):
        await app.create_mission(token, "Moon Walk", "", "")
        with pytest.raises(ConflictError) as exc_info:
            await app.update_mission_name(token, mission_id, "Moon Walk")
        assert exc_info.value.kind == ErrorKind.MISSION_NAME_IN_USE


class TestRemoveMission:
    async def test_remove_is_not_idempotent(self, app, token, mission_id):
        await app.remove_mission(token, mission_id)
        assert await app.list_missions(token) == []

        with pytest.raises(AccessDeniedError):
            await app.remove_mission(token, mission_id)

    async def test_mission_with_crew(self, app, token, mission_id, astronaut_id):
        await app.assign_astronaut(token, mission_id, astronaut_id)
        with pytest.raises(InvariantViolationError) as exc_info:
            await app.remove_mission(token, mission_id)
        assert exc_info.value.kind == ErrorKind.MISSION_HAS_ASTRONAUTS

        await app.unassign_astronaut(token, mission_id, astronaut_id)
        await app.remove_mission(token, mission_id)


class TestTransferMission:
    async def test_transfer_keeps_crew(self, app, token, other_token, mission_id, astronaut_id):
        await app.assign_astronaut(token, mission_id, astronaut_id)
        await app.transfer_mission(token, mission_id, "b@test.com")

        with pytest.raises(AccessDeniedError):
            await app.get_mission(token, mission_id)
        info = await app.get_mission(other_token, mission_id)
        assert [a.astronaut_id for a in info.assigned_astronauts] == [astronaut_id]
        assert [m.mission_id for m in await app.list_missions(other_token)] == [mission_id]

    @pytest.mark.parametrize(
        ("email", "kind"),
        [
            ("bad email", ErrorKind.EMAIL_INVALID),
            ("ghost@test.com", ErrorKind.USER_NOT_REAL),
            ("a@test.com", ErrorKind.CANNOT_TRANSFER_TO_SELF),
        ],
    )
    async def test_invalid_recipient(self, app, token, other_token, mission_id, email, kind):
        with pytest.raises(ValidationError) as exc_info:
            await app.transfer_mission(token, mission_id, email)
        assert exc_info.value.kind == kind

    async def test_name_collision_at_recipient(self, app, token, other_token, mission_id):
        await app.create_mission(other_token, "Mars Run", "", "")
        with pytest.raises(ConflictError) as exc_info:
            await app.transfer_mission(token, mission_id, "b@test.com")
        assert exc_info.value.kind == ErrorKind.NAME_COLLISION_AT_TARGET

        assert (await app.get_mission(token, mission_id)).name == "Mars Run"
        recipient_missions = await app.list_missions(other_token)
        assert mission_id not in [m.mission_id for m in recipient_missions]

    async def test_only_owner_transfers(self, app, token, other_token, mission_id):
        with pytest.raises(AccessDeniedError):
            await app.transfer_mission(other_token, mission_id, "b@test.com")


class TestResetAll:
    async def test_reset_clears_everything(self, app, token, mission_id, astronaut_id):
        await app.assign_astronaut(token, mission_id, astronaut_id)
        await app.reset_all()

        with pytest.raises(AuthenticationError) as exc_info:
            await app.list_missions(token)
        assert exc_info.value.kind == ErrorKind.SESSION_INVALID

        registration = await app.register("a@test.com", "abcdef12", "Ann", "Lee")
        assert registration.user_id == 1
        assert await app.create_mission(registration.auth_token, "Mars Run", "", "") == 1
        assert await app.create_astronaut(
            registration.auth_token, "Jim", "Kirk", "Captain", 35, 75, 180
        ) == 1
