from datetime import datetime
from unittest import mock

import pytest
from sqlalchemy.exc import IntegrityError

from src.cmds.core import infractions
from src.database.models import Infraction, Punishment, Severity, UserInfraction
from src.helpers.responses import PunishCodes, SimpleResponse
from tests import helpers


@pytest.fixture
def cog(bot, session):
    bot.session_factory = session
    return infractions.InfractionsCog(bot)


class TestInfractionsCog:
    """Test the `Infractions` cog."""

    @pytest.mark.asyncio
    async def test_add(self, cog, ctx):
        created = Infraction(id=7, severity=Severity.HIGH, punishment=Punishment.TIMEOUT, duration=600)

        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.create_unique", new_callable=mock.AsyncMock
        ) as create_mock:
            create_mock.return_value = created
            await cog.add.callback(cog, ctx, 7, "High", "Timeout", 600)

            obj_in = create_mock.await_args.kwargs["obj_in"]
            assert obj_in.id == 7
            assert obj_in.severity is Severity.HIGH
            assert obj_in.punishment is Punishment.TIMEOUT
            assert obj_in.duration == 600
            ctx.respond.assert_awaited_once_with(
                "Infraction created!\nID: 7\nSeverity: High\nPunishment: Timeout\nDuration: 600", ephemeral=True
            )

    @pytest.mark.asyncio
    async def test_add_existing(self, cog, ctx):
        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.create_unique", new=mock.AsyncMock(return_value=None)
        ):
            await cog.add.callback(cog, ctx, 7, "Low", "Ban", 0)

            ctx.respond.assert_awaited_once_with("Infraction with ID `7` already exists!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_list_empty(self, cog, ctx):
        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.read_all", new=mock.AsyncMock(return_value=[])
        ):
            await cog.list_.callback(cog, ctx)

            ctx.respond.assert_awaited_once_with("No infractions found in the table!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_list_is_paginated(self, cog, ctx):
        rows = [
            Infraction(id=i, severity=Severity.LOW, punishment=Punishment.STRIKE, duration=0) for i in range(1, 8)
        ]

        with (
            mock.patch("src.cmds.core.infractions.crud.infraction.read_all", new=mock.AsyncMock(return_value=rows)),
            mock.patch("src.cmds.core.infractions.Paginator") as paginator_mock,
        ):
            paginator_mock.return_value.respond = mock.AsyncMock()
            await cog.list_.callback(cog, ctx)

            pages = paginator_mock.call_args.kwargs["pages"]
            assert len(pages) == 2
            assert pages[0].startswith("ID: 1\n")
            assert pages[1].startswith("ID: 6\n")
            paginator_mock.return_value.respond.assert_awaited_once_with(ctx.interaction, ephemeral=True)

    @pytest.mark.asyncio
    async def test_remove(self, cog, ctx):
        existing = Infraction(id=7, severity=Severity.LOW, punishment=Punishment.STRIKE, duration=0)

        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.delete", new=mock.AsyncMock(return_value=existing)
        ):
            await cog.remove.callback(cog, ctx, 7)

            ctx.respond.assert_awaited_once_with("Infraction deleted!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_remove_missing(self, cog, ctx):
        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.delete", new=mock.AsyncMock(return_value=None)
        ):
            await cog.remove.callback(cog, ctx, 7)

            ctx.respond.assert_awaited_once_with("Infraction not deleted!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_remove_applied_infraction(self, cog, ctx):
        error = IntegrityError("DELETE", {}, Exception("foreign key constraint fails"))

        with mock.patch(
            "src.cmds.core.infractions.crud.infraction.delete", new=mock.AsyncMock(side_effect=error)
        ):
            await cog.remove.callback(cog, ctx, 7)

            ctx.respond.assert_awaited_once_with(
                "Infraction not deleted! It has already been applied to users.", ephemeral=True
            )

    @pytest.mark.asyncio
    async def test_user_without_infractions(self, cog, ctx, user):
        with mock.patch(
            "src.cmds.core.infractions.crud.user_infraction.read_for_user", new=mock.AsyncMock(return_value=[])
        ):
            await cog.user.callback(cog, ctx, user)

            ctx.respond.assert_awaited_once_with("User has no infractions!", ephemeral=True)

    @pytest.mark.asyncio
    async def test_user_history(self, cog, ctx, user, db_session):
        record = UserInfraction(id=3, user_id=str(user.id), infraction_id=7, created_at=datetime(2024, 5, 1))

        with (
            mock.patch(
                "src.cmds.core.infractions.crud.user_infraction.read_for_user",
                new=mock.AsyncMock(return_value=[record]),
            ) as read_mock,
            mock.patch("src.cmds.core.infractions.Paginator") as paginator_mock,
        ):
            paginator_mock.return_value.respond = mock.AsyncMock()
            await cog.user.callback(cog, ctx, user)

            read_mock.assert_awaited_once_with(db_session, user_id=user.id)
            assert paginator_mock.call_args.kwargs["pages"] == [
                f"<@{user.id}> Case ID: 3\nInfraction ID: 7\nCreated at: 2024-05-01 00:00:00"
            ]

    @pytest.mark.asyncio
    async def test_punish(self, cog, ctx, session):
        response = SimpleResponse(
            message="Punished users: <@111>\nNot punished users: <@222>", code=PunishCodes.SUCCESS
        )

        with mock.patch(
            "src.cmds.core.infractions.punish_members", new=mock.AsyncMock(return_value=response)
        ) as punish_mock:
            await cog.punish.callback(cog, ctx, 7, "<@111> <@222>", "spam")

            punish_mock.assert_awaited_once_with(session, ctx.guild, ctx.user, 7, "<@111> <@222>", "spam")
            ctx.defer.assert_awaited_once_with(ephemeral=True)
            ctx.respond.assert_awaited_once_with(
                "Punished users: <@111>\nNot punished users: <@222>", ephemeral=True
            )

    def test_setup(self, bot):
        """Test the setup method of the cog."""
        # Invoke the command
        infractions.setup(bot)

        bot.add_cog.assert_called_once()
        assert isinstance(bot.add_cog.call_args.args[0], infractions.InfractionsCog)
