import sys
import os
import asyncio

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend')))

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '..', '.env'))

from app.models.user import User
from app.models.artist import Artist
from app.models.album import Album
from app.models.track import Track
from app.models.playlist import Playlist
from app.models.playlist_track import playlist_track
from app.services import artist_track_service, like_service, rating_service
from app.services.database import engine, transaction
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

async def create_demo_data():
    # Create async session
    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        async with transaction(session):
            # Create demo users
            users = [
                User(user_name="sam", email="sam@example.com", first_name="Sam"),
                User(user_name="vinyl_lover", email="vinyl@example.com"),
            ]
            session.add_all(users)
            await session.flush()

            # Create demo artists
            artists = [
                Artist(name="The Beatles", genres=["rock"], popularity=95),
                Artist(name="John Lennon", genres=["rock"], popularity=80),
                Artist(name="Miles Davis", genres=["jazz"], popularity=85),
            ]
            session.add_all(artists)
            await session.flush()

            # Create demo albums
            albums = [
                Album(name="Abbey Road", release_date="1969-09-26", genres=["rock"]),
                Album(name="Imagine", release_date="1971-09-09", genres=["rock"]),
                Album(name="Kind of Blue", release_date="1959-08-17", genres=["jazz"]),
            ]
            session.add_all(albums)
            await session.flush()

            # Create demo tracks
            tracks = [
                Track(name="Come Together", duration=259, album_id=albums[0].id),
                Track(name="Imagine", duration=183, album_id=albums[1].id),
                Track(name="So What", duration=562, album_id=albums[2].id),
            ]
            session.add_all(tracks)
            await session.flush()

            await artist_track_service.insert_associations(tracks[0].id, [artists[0].id], session)
            await artist_track_service.insert_associations(tracks[1].id, [artists[1].id], session)
            await artist_track_service.insert_associations(tracks[2].id, [artists[2].id], session)

            # Some social activity
            await rating_service.rate(tracks[1], users[0].id, 5, session)
            await rating_service.rate(tracks[1], users[1].id, 4, session)
            await like_service.like(users[0].id, tracks[0].id, session)

            playlist = Playlist(name="Sunday Morning", owner_id=users[0].id)
            session.add(playlist)
            await session.flush()
            await session.execute(
                insert(playlist_track),
                [{"playlist_id": playlist.id, "track_id": track.id} for track in tracks]
            )

        print("✅ Demo data created successfully!")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_demo_data())
