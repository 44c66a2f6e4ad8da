import logging
from typing import Optional

from discord import ApplicationContext, Cog, DiscordException
from discord.ext.commands import (
    Bot as DiscordBot, CommandNotFound, CommandOnCooldown, MissingPermissions, MissingRequiredArgument,
    NoPrivateMessage, UserInputError
)
from discord.errors import ApplicationCommandInvokeError
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core import constants, settings
from src.database.session import create_schema
from src.metrics import completed_commands, errored_commands, received_commands

logger = logging.getLogger(__name__)


class Bot(DiscordBot):
    """Base bot class."""

    name = settings.bot.NAME
    logger = logger

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None, **kwargs):
        """
        Initiate the client with slash commands.

        Args:
            session_factory: Sessions to the bot database, handed to every command that needs it.
        """
        super().__init__(**kwargs)
        self.session_factory = session_factory

    async def start(self, token: str, *, reconnect: bool = True) -> None:
        """Make sure the tables exist before connecting to Discord."""
        if self.session_factory is not None:
            await create_schema(self.session_factory)
        await super().start(token, reconnect=reconnect)

    async def on_ready(self) -> None:
        """Triggered when the bot is ready."""
        name = f"{self.user} (ID: {self.user.id})"
        logger.info(f"Started bot as {name}")

    async def on_application_command(self, ctx: ApplicationContext) -> None:
        """A global handler cog."""
        logger.debug(f"Command '{ctx.command}' received.")
        received_commands.labels(ctx.command.name).inc()

    async def on_application_command_error(self, ctx: ApplicationContext, error: DiscordException) -> None:
        """A global error handler cog."""
        if isinstance(error, ApplicationCommandInvokeError):
            error = error.original

        message = None
        if isinstance(error, CommandNotFound):
            return
        if isinstance(error, MissingRequiredArgument):
            message = f"Parameter '{error.param.name}' is required, but missing."
        elif isinstance(error, MissingPermissions):
            message = "You are missing the required permissions to run this command."
        elif isinstance(error, UserInputError):
            message = "Something about your input was wrong, please check your input and try again."
        elif isinstance(error, NoPrivateMessage):
            message = "This command cannot be run in a DM."
        elif isinstance(error, CommandOnCooldown):
            message = f"You are on cooldown. Try again in {error.retry_after:.2f}s"
        elif isinstance(error, NoResultFound):
            message = "The requested object could not be found."
        elif isinstance(error, SQLAlchemyError):
            logger.error("Database error while running a command", exc_info=error)
            message = constants.messages.infrastructure_failure

        errored_commands.labels(ctx.command.name).inc()

        if message is None:
            raise error
        else:
            logger.debug("A user caused an error which was handled.", exc_info=error)
            await ctx.respond(message, delete_after=15, ephemeral=True)

    async def on_application_command_completion(self, ctx: ApplicationContext) -> None:
        """A global cog handler."""
        logger.debug(f"Command '{ctx.command}' completed.")
        completed_commands.labels(ctx.command.name).inc()

    async def on_error(self, event: any, *args, **kwargs) -> None:
        """Don't ignore the error, causing Sentry to capture it."""
        raise

    def add_cog(self, cog: Cog, *, override: bool = False) -> None:
        """Log whenever a cog is loaded."""
        super().add_cog(cog, override=override)
        logger.debug(f"Cog loaded: {cog.qualified_name}")
