"""Shared fixtures: an in-memory SQLite catalog per test and an authenticated API client."""

import os

# Settings are read at import time, so the environment must be ready first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BASE_URL"] = "http://testserver"

from types import SimpleNamespace

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.models.album import Album
from app.models.artist import Artist
from app.models.artist_follow import ArtistFollow  # noqa: F401 - registers the table
from app.models.playlist import Playlist  # noqa: F401
from app.models.playlist_track import playlist_track  # noqa: F401
from app.models.track import Track
from app.models.track_artist import track_artist_association
from app.models.track_like import TrackLike  # noqa: F401
from app.models.track_rating import TrackRating  # noqa: F401
from app.models.user import User
from app.services.database import Base, get_db
from main import app


@pytest.fixture
async def engine():
    """Fresh in-memory database; StaticPool keeps every session on one connection."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def catalog(db_session):
    """Two users, four artists and two albums, committed."""
    users = [
        User(user_name="ana", email="ana@example.com"),
        User(user_name="bruno", email="bruno@example.com"),
    ]
    artists = [
        Artist(name="John Lennon", popularity=80),
        Artist(name="Paul McCartney", popularity=78),
        Artist(name="George Harrison", popularity=70),
        Artist(name="Ringo Starr", popularity=60),
    ]
    albums = [
        Album(name="Imagine", release_date="1971-09-09"),
        Album(name="Abbey Road", release_date="1969-09-26"),
    ]
    db_session.add_all(users + artists + albums)
    await db_session.commit()

    return SimpleNamespace(
        users=users,
        artists=artists,
        albums=albums,
        artist_ids=[artist.id for artist in artists],
    )


@pytest.fixture
def make_track(db_session):
    """Insert a track with artist links directly, bypassing the command handler."""

    async def _make_track(name, album_id, artist_ids, duration=180):
        track = Track(name=name, album_id=album_id, duration=duration)
        db_session.add(track)
        await db_session.flush()
        if artist_ids:
            await db_session.execute(
                insert(track_artist_association),
                [{"artist_id": artist_id, "track_id": track.id} for artist_id in artist_ids]
            )
        await db_session.commit()
        return track

    return _make_track


def token_for(user_id: int) -> str:
    return jwt.encode({"id": user_id}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
async def client(session_factory):
    """API client whose requests each get their own session on the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(catalog):
    return {"Authorization": f"Bearer {token_for(catalog.users[0].id)}"}
