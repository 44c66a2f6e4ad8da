import logging
from typing import Sequence

import arrow
from discord import ApplicationContext, Embed, Interaction, Member, Option, WebhookMessage, slash_command
from discord.ext import commands
from discord.ext.commands import has_permissions

from src.bot import Bot
from src.core import constants, settings
from src.helpers.moderation import kick_members
from src.utils.formatters import format_user_list

logger = logging.getLogger(__name__)


class KickCog(commands.Cog):
    """Kick several users at once."""

    def __init__(self, bot: Bot):
        self.bot = bot

    @slash_command(guild_ids=settings.guild_ids, description="Kick one or more users from the server.")
    @has_permissions(kick_members=True)
    async def kick(
        self,
        ctx: ApplicationContext,
        users: Option(str, "Mentions or ids of the users to kick."),
        reason: Option(str, "Reason for the kick.", required=False, default=None),
    ) -> Interaction | WebhookMessage:
        """Kick one or more users from the server."""
        await ctx.defer(ephemeral=True)
        result = await kick_members(ctx.guild, ctx.user, users, reason)
        embed = self._build_kick_embed(ctx, result.succeeded, reason or constants.messages.no_reason)
        return await ctx.respond(embed=embed, ephemeral=True)

    @staticmethod
    def _build_kick_embed(ctx: ApplicationContext, kicked: Sequence[Member], reason: str) -> Embed:
        """Summary embed: who ran the kick, why, and who is gone."""
        author = ctx.user
        client = ctx.bot.user
        embed = Embed(
            title="Kick",
            description=f"**{len(kicked)}** users kicked out!",
            colour=constants.colours.kick_green,
            timestamp=arrow.utcnow().datetime,
        )
        embed.set_author(name=author.name, icon_url=author.display_avatar.url)
        embed.set_footer(text=client.name, icon_url=client.display_avatar.url)
        embed.add_field(name="Reason", value=reason, inline=False)
        embed.add_field(name="Users", value=format_user_list(kicked), inline=False)
        return embed


def setup(bot: Bot) -> None:
    """Load the `KickCog` cog."""
    bot.add_cog(KickCog(bot))
