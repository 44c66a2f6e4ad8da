"""Role rank comparisons between the member running a command and its targets."""

import asyncio
import logging
from typing import Iterable, Sequence

import aiohttp
from discord import Guild, HTTPException, Member, NotFound

logger = logging.getLogger(__name__)


class RankLookupError(Exception):
    """Role data for a member could not be fetched from Discord."""

    def __init__(self, user_id: int, message: str | None = None):
        self.user_id = user_id
        super().__init__(message or f"Could not look up the roles of user {user_id}")


class MemberNotFoundError(RankLookupError):
    """The user is not (or no longer) a member of the guild."""

    def __init__(self, user_id: int):
        super().__init__(user_id, f"User {user_id} is not a member of this guild")


async def fetch_member(guild: Guild, user_id: int) -> Member:
    """Fetch a member from the API so the role data is current."""
    try:
        return await guild.fetch_member(user_id)
    except NotFound as exc:
        raise MemberNotFoundError(user_id) from exc
    except (HTTPException, aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.error(f"Discord error while fetching guild member with id: {user_id}", exc_info=exc)
        raise RankLookupError(user_id) from exc


async def fetch_members(guild: Guild, user_ids: Iterable[int]) -> list[Member]:
    """Fetch every member concurrently, raising the first lookup error encountered."""
    results = await asyncio.gather(
        *(fetch_member(guild, user_id) for user_id in user_ids), return_exceptions=True
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


async def fetch_members_lenient(guild: Guild, user_ids: Iterable[int]) -> list[Member]:
    """Fetch members concurrently, leaving out users that cannot be resolved."""
    results = await asyncio.gather(
        *(fetch_member(guild, user_id) for user_id in user_ids), return_exceptions=True
    )
    members = []
    for result in results:
        if isinstance(result, RankLookupError):
            logger.debug(f"Skipping user {result.user_id}: {result}")
            continue
        if isinstance(result, BaseException):
            raise result
        members.append(result)
    return members


def highest_role_rank(member: Member) -> int:
    """Position of the member's highest role, @everyone being the lowest."""
    return member.top_role.position


def is_authorized(actor: Member, targets: Sequence[Member]) -> bool:
    """Whether `actor` ranks strictly above every target. Equal rank is not enough."""
    actor_rank = highest_role_rank(actor)
    for target in targets:
        if highest_role_rank(target) >= actor_rank:
            logger.info(
                "Punishment refused: target ranks equal to or above the author",
                extra={"author": actor.id, "target": target.id},
            )
            return False
    return True


def members_below(actor: Member, members: Iterable[Member]) -> list[Member]:
    """Keep only the members ranked strictly below `actor`."""
    actor_rank = highest_role_rank(actor)
    return [member for member in members if highest_role_rank(member) < actor_rank]
