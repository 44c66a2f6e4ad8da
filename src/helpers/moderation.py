"""Bulk moderation workflows behind `/punish` and `/kick`. Bot or message responses are NOT allowed."""

import logging
from functools import partial

import arrow
from discord import Guild, Member
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core import constants
from src.database import crud
from src.helpers.audit import log_punishment
from src.helpers.dispatch import DispatchResult, dispatch
from src.helpers.parsing import user_ids_from
from src.helpers.privilege import (
    MemberNotFoundError, RankLookupError, fetch_member, fetch_members, fetch_members_lenient, is_authorized,
    members_below,
)
from src.helpers.punishment import KickStrategy, PunishmentContext, strategy_for
from src.helpers.responses import PunishCodes, SimpleResponse
from src.utils.formatters import punish_summary

logger = logging.getLogger(__name__)


async def punish_members(
    session_factory: async_sessionmaker[AsyncSession],
    guild: Guild,
    author: Member,
    infraction_id: int,
    users: str,
    reason: str,
) -> SimpleResponse:
    """
    Punish every user referenced in `users` with the catalog infraction `infraction_id`.

    Nothing is dispatched unless the infraction exists, every user is a member of the guild and the author
    outranks all of them. Each attempt, successful or not, is written to the audit log.

    Args:
        session_factory: Sessions to the catalog and audit log.
        guild: The guild to punish the members in.
        author: The member running the command.
        infraction_id: The catalog infraction to apply.
        users: Free-form list of mentions and/or user ids.
        reason: Message attached to the punishment.

    Returns:
        SimpleResponse whose code tells the outcome apart.
    """
    user_ids = user_ids_from(users)
    if not user_ids:
        return SimpleResponse(message=constants.messages.no_users, code=PunishCodes.NOT_FOUND)

    try:
        async with session_factory() as session:
            infraction = await crud.infraction.read(session, infraction_id)
    except SQLAlchemyError as exc:
        logger.error(f"Could not read infraction {infraction_id}", exc_info=exc)
        return _infrastructure_failure()

    if infraction is None:
        return SimpleResponse(message=constants.messages.infraction_not_found, code=PunishCodes.NOT_FOUND)

    try:
        author = await fetch_member(guild, author.id)
        targets = await fetch_members(guild, user_ids)
    except MemberNotFoundError as exc:
        return SimpleResponse(
            message=f"User <@{exc.user_id}> is not a member of this server.", code=PunishCodes.NOT_FOUND
        )
    except RankLookupError:
        return _infrastructure_failure()

    if not is_authorized(author, targets):
        return SimpleResponse(message=constants.messages.unauthorized, code=PunishCodes.UNAUTHORIZED)

    try:
        context = PunishmentContext.for_infraction(infraction, reason, arrow.utcnow())
    except (OverflowError, ValueError) as exc:
        logger.warning(f"Infraction {infraction.id} has an unusable duration: {infraction.duration}", exc_info=exc)
        return SimpleResponse(
            message=constants.messages.duration_out_of_range, code=PunishCodes.INVALID_INFRACTION
        )

    audit = partial(_log_member, session_factory, infraction.id)
    result = await dispatch(strategy_for(infraction.punishment), guild, targets, context, audit=audit)

    logger.info(
        f"Infraction {infraction.id} ({infraction.punishment.value}) dispatched by {author.id}",
        extra={"succeeded": [m.id for m in result.succeeded], "failed": [m.id for m in result.failed]},
    )
    return SimpleResponse(message=punish_summary(result), code=PunishCodes.SUCCESS)


def _infrastructure_failure() -> SimpleResponse:
    return SimpleResponse(
        message=constants.messages.infrastructure_failure, code=PunishCodes.INFRASTRUCTURE_FAILURE
    )


async def _log_member(session_factory: async_sessionmaker[AsyncSession], infraction_id: int, member: Member) -> None:
    await log_punishment(session_factory, member.id, infraction_id)


async def kick_members(guild: Guild, author: Member, users: str, reason: str | None) -> DispatchResult:
    """
    Kick every referenced member ranked strictly below `author`.

    Users that are not members, or that rank equal to or above the author, are left out without
    failing the command. Kicks are not written to the audit log.
    """
    members = await fetch_members_lenient(guild, user_ids_from(users))
    targets = members_below(author, members)
    if len(targets) < len(members):
        logger.info(
            f"Left out {len(members) - len(targets)} member(s) ranked at or above {author.id} from a kick",
            extra={"guild": guild.id},
        )

    return await dispatch(KickStrategy(), guild, targets, PunishmentContext(reason=reason))
