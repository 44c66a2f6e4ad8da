import logging
import re

logger = logging.getLogger(__name__)

USER_REFERENCE = re.compile(r"<@!?(\d+)>|(\d+)")
SEPARATORS = re.compile(r"[\s,]+")


def user_ids_from(raw: str | None) -> list[int]:
    """
    Extract user ids from free-form input such as ``"<@111>, <@!222> 333"``.

    Tokens that are neither a mention nor a plain numeric id are dropped. Order is kept and
    duplicates are not removed.
    """
    if not raw:
        return []

    user_ids = []
    for token in SEPARATORS.split(raw.strip()):
        if not token:
            continue
        match = USER_REFERENCE.fullmatch(token)
        if match is None:
            logger.debug(f"Ignoring malformed user reference: {token!r}")
            continue
        user_ids.append(int(match.group(1) or match.group(2)))
    return user_ids
