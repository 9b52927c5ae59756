import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.artist import Artist
from app.models.artist_follow import ArtistFollow
from app.services import artist_track_service
from app.services.entry_store import insert_for

logger = logging.getLogger(__name__)


async def find_all_artists(db: AsyncSession, name: Optional[str] = None) -> List[Artist]:
    """List artists, optionally filtered by a case-insensitive name substring."""
    logger.info("Finding artists")
    stmt = select(Artist).order_by(Artist.id)
    if name:
        stmt = stmt.where(Artist.name.ilike(f"%{name}%"))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def follow(user_id: int, artist_id: int, db: AsyncSession) -> bool:
    """Follow an artist. Following twice is a no-op; returns True if a row was written."""
    logger.debug(f"User {user_id} following artist {artist_id}")
    insert = insert_for(db)
    result = await db.execute(
        insert(ArtistFollow)
        .values(user_id=user_id, artist_id=artist_id)
        .on_conflict_do_nothing(index_elements=[ArtistFollow.user_id, ArtistFollow.artist_id])
    )
    if not result.rowcount:
        logger.warning(f"User {user_id} already follows artist {artist_id}")
        return False
    return True


async def unfollow(user_id: int, artist_id: int, db: AsyncSession) -> None:
    logger.debug(f"User {user_id} unfollowing artist {artist_id}")
    await db.execute(
        delete(ArtistFollow).where(
            ArtistFollow.user_id == user_id,
            ArtistFollow.artist_id == artist_id
        )
    )


async def find_user_favorite_artists(user_id: int, db: AsyncSession) -> List[Artist]:
    followed_ids = select(ArtistFollow.artist_id).where(ArtistFollow.user_id == user_id)
    result = await db.execute(
        select(Artist).where(Artist.id.in_(followed_ids)).order_by(Artist.id)
    )
    return list(result.scalars().all())


async def delete_artist(artist_id: int, db: AsyncSession) -> None:
    """Delete an artist with its track links and followers. Tracks stay."""
    logger.debug(f"Deleting artist {artist_id}")
    await artist_track_service.delete_associations_of_artist(artist_id, db)
    await db.execute(delete(ArtistFollow).where(ArtistFollow.artist_id == artist_id))
    await db.execute(delete(Artist).where(Artist.id == artist_id))
