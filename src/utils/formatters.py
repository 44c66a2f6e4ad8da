from typing import Iterable

from discord import Member

from src.core import constants
from src.database.models import Infraction, UserInfraction
from src.helpers.dispatch import DispatchResult


def mentions(user_ids: Iterable[int | str]) -> list[str]:
    """Turn user ids into mention strings."""
    return [f"<@{user_id}>" for user_id in user_ids]


def format_user_list(members: Iterable[Member], limit: int = constants.embed_field_limit) -> str:
    """Comma separated mentions, shortened to fit in an embed field."""
    text = ", ".join(mentions(member.id for member in members))
    if not text:
        return "None"
    if len(text) > limit:
        return text[:limit - 3] + "..."
    return text


def format_infraction(infraction: Infraction) -> str:
    return (
        f"ID: {infraction.id}\n"
        f"Severity: {infraction.severity.value}\n"
        f"Punishment: {infraction.punishment.value}\n"
        f"Duration: {infraction.duration}"
    )


def format_user_infraction(record: UserInfraction) -> str:
    return (
        f"<@{record.user_id}> Case ID: {record.id}\n"
        f"Infraction ID: {record.infraction_id}\n"
        f"Created at: {record.created_at}"
    )


def punish_summary(result: DispatchResult) -> str:
    """Render the outcome of `/punish` for the moderator who ran it."""
    summary = (
        f"Punished users: {', '.join(mentions(m.id for m in result.succeeded))}\n"
        f"Not punished users: {', '.join(mentions(m.id for m in result.failed))}"
    )
    if result.unlogged:
        summary += f"\nCould not record the infraction for: {', '.join(mentions(m.id for m in result.unlogged))}"
    return summary
