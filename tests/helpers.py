from __future__ import annotations

import inspect
import itertools
from collections import ChainMap
from typing import Union
from unittest import mock

import discord

from src.bot import Bot


class HashableMixin:
    """Hash and compare mocks by `id`, the way discord.py's `Hashable` does."""

    def __hash__(self):
        return self.id

    def __eq__(self, other):
        return isinstance(other, HashableMixin) and other.id == self.id


class CustomMockMixin:
    """
    Provides common functionality for our custom Mock types.

    The mock is specced against `spec_class`, so coroutine methods of the real class become `AsyncMock`
    children and accessing an attribute the real class does not have raises `AttributeError`. Children
    are plain `MagicMock`s rather than instances of the custom mock type.
    """

    discord_id = itertools.count(1_000)
    spec_class = None

    def __init__(self, **kwargs):
        name = kwargs.pop('name', None)  # `name` has special meaning for Mock classes, so we need to set it manually.
        super().__init__(spec=self.spec_class, **kwargs)

        if name:
            self.name = name

    def _get_child_mock(self, **kwargs) -> Union[mock.MagicMock, mock.AsyncMock]:
        """Children of custom mocks are regular mocks, except coroutine methods of the spec which are async."""
        attribute = getattr(self.spec_class, kwargs.get("_new_name") or "", None)
        if inspect.iscoroutinefunction(attribute):
            return mock.AsyncMock(**kwargs)
        return mock.MagicMock(**kwargs)


class MockRole(CustomMockMixin, HashableMixin, mock.Mock):
    """A Mock subclass to mock `discord.Role` objects, compared by `position`."""
    spec_class = discord.Role

    def __init__(self, **kwargs) -> None:
        default_kwargs = {'id': next(self.discord_id), 'name': 'role', 'position': 1}
        super().__init__(**ChainMap(kwargs, default_kwargs))

        if 'mention' not in kwargs:
            self.mention = f'<@&{self.id}>'

    def __lt__(self, other):
        return self.position < other.position


class MockGuild(CustomMockMixin, HashableMixin, mock.Mock):
    """A Mock subclass to mock `discord.Guild` objects; `ban`, `kick` and `fetch_member` are awaitable."""
    spec_class = discord.Guild

    def __init__(self, **kwargs) -> None:
        default_kwargs = {'id': next(self.discord_id), 'name': 'guild'}
        super().__init__(**ChainMap(kwargs, default_kwargs))


class MockMember(CustomMockMixin, HashableMixin, mock.Mock):
    """
    A Mock subclass to mock `discord.Member` objects.

    `rank` is the position of the member's top role, @everyone sitting at position 0.
    """
    spec_class = discord.Member

    def __init__(self, rank: int = 0, **kwargs) -> None:
        default_kwargs = {'name': 'member', 'id': next(self.discord_id), 'bot': False}
        super().__init__(**ChainMap(kwargs, default_kwargs))

        self.top_role = MockRole(position=rank)
        self.display_avatar = mock.MagicMock(url="https://cdn.discordapp.com/embed/avatars/0.png")

        if 'mention' not in kwargs:
            self.mention = f"<@{self.id}>"


class MockUser(CustomMockMixin, HashableMixin, mock.Mock):
    """A Mock subclass to mock `discord.User` objects."""
    spec_class = discord.User

    def __init__(self, **kwargs) -> None:
        default_kwargs = {'name': 'user', 'id': next(self.discord_id), 'bot': False}
        super().__init__(**ChainMap(kwargs, default_kwargs))

        if 'mention' not in kwargs:
            self.mention = f"<@{self.id}>"


class MockDMChannel(CustomMockMixin, HashableMixin, mock.Mock):
    """A Mock subclass to mock `discord.DMChannel` objects."""
    spec_class = discord.DMChannel

    def __init__(self, **kwargs) -> None:
        default_kwargs = {'id': next(self.discord_id)}
        super().__init__(**ChainMap(kwargs, default_kwargs))


class MockBot(CustomMockMixin, mock.MagicMock):
    """A MagicMock subclass to mock our `Bot`, `session_factory` is set per test."""
    spec_class = Bot

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.user = MockUser(name="Warden")
        self.user.display_avatar = mock.MagicMock(url="https://cdn.discordapp.com/embed/avatars/1.png")
        self.session_factory = None


class MockContext(CustomMockMixin, mock.MagicMock):
    """A MagicMock subclass to mock `discord.ApplicationContext` objects."""
    spec_class = discord.ApplicationContext

    def __init__(self, **kwargs) -> None:
        super().__init__()
        self.bot = kwargs.get('bot', MockBot())
        self.guild = kwargs.get('guild', MockGuild())
        self.user = kwargs.get('user', MockMember(rank=10, name="moderator"))
        self.author = self.user
        self.interaction = mock.MagicMock()
        self.command = mock.MagicMock()
        self.respond = mock.AsyncMock()
        self.defer = mock.AsyncMock()


def http_exception(status: int = 500, reason: str = "Internal Server Error") -> discord.HTTPException:
    """Build the exception Discord raises for a failed API call."""
    response = mock.MagicMock(status=status, reason=reason)
    return discord.HTTPException(response, {"code": status, "message": reason})


def forbidden() -> discord.Forbidden:
    response = mock.MagicMock(status=403, reason="Forbidden")
    return discord.Forbidden(response, {"code": 50013, "message": "Missing Permissions"})


def not_found() -> discord.NotFound:
    response = mock.MagicMock(status=404, reason="Not Found")
    return discord.NotFound(response, {"code": 10007, "message": "Unknown Member"})
