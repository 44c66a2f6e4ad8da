import logging
from typing import Sequence

from discord import ApplicationContext, Interaction, Option, SlashCommandGroup, User, WebhookMessage, slash_command
from discord.ext import commands
from discord.ext.commands import has_permissions
from discord.ext.pages import Paginator
from sqlalchemy.exc import IntegrityError

from src.bot import Bot
from src.core import constants, settings
from src.database import crud
from src.database.models import Punishment, Severity
from src.database.schemas.infraction import InfractionCreate
from src.helpers.moderation import punish_members
from src.utils.formatters import format_infraction, format_user_infraction

logger = logging.getLogger(__name__)


class InfractionsCog(commands.Cog):
    """Manage the infraction catalog and punish users with it."""

    def __init__(self, bot: Bot):
        self.bot = bot

    infractions = SlashCommandGroup("infractions", "Manage the infraction catalog.", guild_ids=settings.guild_ids)

    @infractions.command(description="Add an infraction to the catalog.")
    @has_permissions(administrator=True)
    async def add(
        self,
        ctx: ApplicationContext,
        infraction_id: int,
        severity: Option(str, "How serious the infraction is.", choices=[s.value for s in Severity]),
        punishment: Option(str, "What happens to punished users.", choices=[p.value for p in Punishment]),
        duration: Option(int, "Timeout length in seconds, ignored by the other punishments."),
    ) -> Interaction | WebhookMessage:
        """Add an infraction to the catalog."""
        await ctx.defer(ephemeral=True)
        obj_in = InfractionCreate(
            id=infraction_id, severity=Severity(severity), punishment=Punishment(punishment), duration=duration
        )
        async with self.bot.session_factory() as session:
            infraction = await crud.infraction.create_unique(session, obj_in=obj_in)

        if infraction is None:
            return await ctx.respond(f"Infraction with ID `{infraction_id}` already exists!", ephemeral=True)

        logger.info(f"Infraction {infraction_id} created by {ctx.user.id}")
        return await ctx.respond(f"Infraction created!\n{format_infraction(infraction)}", ephemeral=True)

    @infractions.command(name="list", description="List every infraction of the catalog.")
    @has_permissions(administrator=True)
    async def list_(self, ctx: ApplicationContext) -> Interaction | WebhookMessage | None:
        """List every infraction of the catalog."""
        await ctx.defer(ephemeral=True)
        async with self.bot.session_factory() as session:
            infractions = await crud.infraction.read_all(session, order_by="id")

        if not infractions:
            return await ctx.respond("No infractions found in the table!", ephemeral=True)

        await self._paginate(ctx, [format_infraction(infraction) for infraction in infractions])

    @infractions.command(description="Remove an infraction from the catalog.")
    @has_permissions(administrator=True)
    async def remove(self, ctx: ApplicationContext, infraction_id: int) -> Interaction | WebhookMessage:
        """Remove an infraction from the catalog."""
        await ctx.defer(ephemeral=True)
        async with self.bot.session_factory() as session:
            try:
                infraction = await crud.infraction.delete(session, id_=infraction_id)
            except IntegrityError as exc:
                logger.info(f"Infraction {infraction_id} is referenced by applied punishments", exc_info=exc)
                return await ctx.respond(
                    "Infraction not deleted! It has already been applied to users.", ephemeral=True
                )

        if infraction is None:
            return await ctx.respond("Infraction not deleted!", ephemeral=True)

        logger.info(f"Infraction {infraction_id} deleted by {ctx.user.id}")
        return await ctx.respond("Infraction deleted!", ephemeral=True)

    @infractions.command(description="Show the infractions applied to a user.")
    @has_permissions(kick_members=True, ban_members=True, moderate_members=True)
    async def user(self, ctx: ApplicationContext, user: User) -> Interaction | WebhookMessage | None:
        """Show the infractions applied to a user."""
        await ctx.defer(ephemeral=True)
        async with self.bot.session_factory() as session:
            records = await crud.user_infraction.read_for_user(session, user_id=user.id)

        if not records:
            return await ctx.respond("User has no infractions!", ephemeral=True)

        await self._paginate(ctx, [format_user_infraction(record) for record in records])

    @slash_command(guild_ids=settings.guild_ids, description="Punish users with an infraction from the catalog.")
    @has_permissions(kick_members=True, ban_members=True, moderate_members=True)
    async def punish(
        self,
        ctx: ApplicationContext,
        infraction_id: int,
        users: Option(str, "Mentions or ids of the users to punish."),
        message: Option(str, "Reason sent along with the punishment."),
    ) -> Interaction | WebhookMessage:
        """Punish users with an infraction from the catalog."""
        await ctx.defer(ephemeral=True)
        response = await punish_members(
            self.bot.session_factory, ctx.guild, ctx.user, infraction_id, users, message
        )
        logger.debug(f"Punish command finished: {response}")
        return await ctx.respond(response.message, ephemeral=True)

    @staticmethod
    async def _paginate(ctx: ApplicationContext, entries: Sequence[str]) -> None:
        """Send `entries` as pages of a few entries each."""
        per_page = constants.entries_per_page
        pages = [
            "\n\n".join(entries[i:i + per_page]) for i in range(0, len(entries), per_page)
        ]
        paginator = Paginator(pages=pages)
        await paginator.respond(ctx.interaction, ephemeral=True)


def setup(bot: Bot) -> None:
    """Load the `InfractionsCog` cog."""
    bot.add_cog(InfractionsCog(bot))
