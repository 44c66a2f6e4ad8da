from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tests import helpers


@pytest.fixture
def bot():
    return helpers.MockBot()


@pytest.fixture
def ctx(bot, guild):
    return helpers.MockContext(bot=bot, guild=guild)


@pytest.fixture
def user():
    return helpers.MockUser()


@pytest.fixture
def member():
    return helpers.MockMember()


@pytest.fixture
def author():
    return helpers.MockMember(rank=10, name="moderator")


@pytest.fixture
def guild():
    # Create and return a mocked instance of the Guild class
    return helpers.MockGuild()


@pytest.fixture
def db_session():
    # Mock the AsyncSession class
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def session(mocker, db_session):
    class AsyncContextManager:
        async def __aenter__(self):
            return db_session

        async def __aexit__(self, exc_type, exc, tb):
            pass

    # Mock the async_sessionmaker
    async_sessionmaker_mock = mocker.MagicMock(spec=async_sessionmaker)
    async_sessionmaker_mock.side_effect = lambda: AsyncContextManager()
    return async_sessionmaker_mock
