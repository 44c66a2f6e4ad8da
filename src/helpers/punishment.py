"""Punishments that can be applied to a single guild member. Bot or message responses are NOT allowed."""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

import aiohttp
import arrow
from discord import Guild, HTTPException, Member
from pydantic import BaseModel, ConfigDict

from src.database.models import Infraction, Punishment

logger = logging.getLogger(__name__)

# Everything Discord (or the connection to it) can throw at a single action.
PLATFORM_ERRORS = (HTTPException, aiohttp.ClientError, asyncio.TimeoutError)


class PunishmentContext(BaseModel):
    """What a strategy needs to punish the members of one batch."""

    reason: Optional[str] = None
    until: Optional[datetime] = None
    infraction_id: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_infraction(cls, infraction: Infraction, reason: str | None, now: arrow.Arrow) -> "PunishmentContext":
        """
        Build the context of a batch punished with `infraction`.

        `now` is read once by the caller, so every member of a batch is timed out until the same instant.
        """
        until = None
        if infraction.punishment is Punishment.TIMEOUT:
            until = now.shift(seconds=infraction.duration).datetime
        return cls(reason=reason, until=until, infraction_id=infraction.id)


class PunishmentStrategy(ABC):
    """Applies one kind of punishment to one member."""

    name: str

    async def apply(self, guild: Guild, member: Member, context: PunishmentContext) -> bool:
        """Apply the punishment, returns False when Discord refused or could not be reached."""
        try:
            await self._execute(guild, member, context)
        except PLATFORM_ERRORS as exc:
            logger.warning(
                f"{self.name} failed for user with ID {member.id}",
                exc_info=exc,
                extra={"guild": guild.id, "punishment": self.name},
            )
            return False

        logger.info(f"{self.name} applied to user {member.id}", extra={"guild": guild.id})
        return True

    @abstractmethod
    async def _execute(self, guild: Guild, member: Member, context: PunishmentContext) -> None:
        ...


class BanStrategy(PunishmentStrategy):
    name = "Ban"

    async def _execute(self, guild: Guild, member: Member, context: PunishmentContext) -> None:
        await guild.ban(member, reason=context.reason, delete_message_seconds=0)


class TimeoutStrategy(PunishmentStrategy):
    name = "Timeout"

    async def _execute(self, guild: Guild, member: Member, context: PunishmentContext) -> None:
        if context.until is None:
            raise ValueError("A timeout needs an end date")
        await member.timeout(context.until, reason=context.reason)


class StrikeStrategy(PunishmentStrategy):
    """Warns the member in their DMs, nothing changes on the guild itself."""

    name = "Strike"

    async def _execute(self, guild: Guild, member: Member, context: PunishmentContext) -> None:
        channel = await member.create_dm()
        await channel.send(
            f"You received a strike on {guild.name}.\n"
            f"Following is the reason given:\n>>> {context.reason}\n"
        )


class KickStrategy(PunishmentStrategy):
    name = "Kick"

    async def _execute(self, guild: Guild, member: Member, context: PunishmentContext) -> None:
        await guild.kick(member, reason=context.reason)


STRATEGIES: dict[Punishment, PunishmentStrategy] = {
    Punishment.BAN: BanStrategy(),
    Punishment.TIMEOUT: TimeoutStrategy(),
    Punishment.STRIKE: StrikeStrategy(),
}


def strategy_for(punishment: Punishment) -> PunishmentStrategy:
    try:
        return STRATEGIES[punishment]
    except KeyError:
        raise ValueError(f"No strategy registered for punishment {punishment!r}") from None
