import asyncio
import logging
from typing import Any, Awaitable, Callable, NamedTuple, Optional, Sequence

from discord import Guild, Member

from src.helpers.punishment import PunishmentContext, PunishmentStrategy
from src.metrics import audit_write_failures, punishments_applied, punishments_failed

logger = logging.getLogger(__name__)

AuditHook = Callable[[Member], Awaitable[Any]]


class DispatchResult(NamedTuple):
    """Outcome of a bulk punishment. Every target is in exactly one of `succeeded` and `failed`."""

    succeeded: list[Member]
    failed: list[Member]
    # Members whose attempt could not be written to the audit log, whatever the outcome.
    unlogged: list[Member]


async def _attempt(
    strategy: PunishmentStrategy, guild: Guild, member: Member, context: PunishmentContext,
    audit: Optional[AuditHook]
) -> tuple[bool, bool]:
    try:
        applied = await strategy.apply(guild, member, context)
    except Exception as exc:
        logger.error(
            f"Unexpected error while applying {strategy.name} to user {member.id}",
            exc_info=exc,
            extra={"guild": guild.id},
        )
        applied = False

    if applied:
        punishments_applied.labels(strategy.name).inc()
    else:
        punishments_failed.labels(strategy.name).inc()

    if audit is None:
        return applied, True

    try:
        await audit(member)
    except Exception as exc:
        # The punishment already happened (or was attempted), report it as such and flag the gap.
        audit_write_failures.inc()
        logger.error(
            f"Could not write the audit record for user {member.id}",
            exc_info=exc,
            extra={"guild": guild.id, "infraction_id": context.infraction_id, "applied": applied},
        )
        return applied, False
    return applied, True


async def dispatch(
    strategy: PunishmentStrategy,
    guild: Guild,
    targets: Sequence[Member],
    context: PunishmentContext,
    audit: Optional[AuditHook] = None,
) -> DispatchResult:
    """
    Punish every target concurrently with `strategy`.

    Each target is attempted exactly once, and `audit` (when given) is awaited once after every attempt,
    failed ones included. A failing target never stops the others.

    Args:
        strategy: The punishment to apply.
        guild: The guild the targets are members of.
        targets: The members to punish, duplicates are attempted twice.
        context: Reason and timing shared by the whole batch.
        audit: Coroutine function recording the attempt for a member.

    Returns:
        DispatchResult partitioning the targets by outcome.
    """
    outcomes = await asyncio.gather(
        *(_attempt(strategy, guild, member, context, audit) for member in targets), return_exceptions=True
    )

    result = DispatchResult(succeeded=[], failed=[], unlogged=[])
    for member, outcome in zip(targets, outcomes):
        if isinstance(outcome, BaseException):
            logger.error(
                f"Attempt of {strategy.name} on user {member.id} was interrupted",
                exc_info=outcome,
                extra={"guild": guild.id},
            )
            result.failed.append(member)
            continue

        applied, logged = outcome
        (result.succeeded if applied else result.failed).append(member)
        if not logged:
            result.unlogged.append(member)

    logger.debug(
        f"{strategy.name} dispatched to {len(targets)} member(s)",
        extra={"succeeded": len(result.succeeded), "failed": len(result.failed), "unlogged": len(result.unlogged)},
    )
    return result
