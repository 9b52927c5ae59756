import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.track_like import TrackLike
from app.schemas.track import TrackView
from app.services.entry_store import insert_for
from app.services.track_query import find_tracks_with_ids

logger = logging.getLogger(__name__)


async def like(user_id: int, track_id: int, db: AsyncSession) -> bool:
    """
    Mark a track as liked by the user. Liking twice is a no-op.

    Returns True when a new like row was written.
    """
    logger.debug(f"User {user_id} liking track {track_id}")
    insert = insert_for(db)
    stmt = (
        insert(TrackLike)
        .values(user_id=user_id, track_id=track_id)
        .on_conflict_do_nothing(index_elements=[TrackLike.user_id, TrackLike.track_id])
    )
    result = await db.execute(stmt)
    if not result.rowcount:
        logger.warning(f"User {user_id} already liked track {track_id}")
        return False
    return True


async def dislike(user_id: int, track_id: int, db: AsyncSession) -> None:
    # Removing a like that does not exist is fine
    logger.debug(f"User {user_id} disliking track {track_id}")
    await db.execute(
        delete(TrackLike).where(TrackLike.user_id == user_id, TrackLike.track_id == track_id)
    )


async def find_liked_track_ids(user_id: int, db: AsyncSession) -> List[int]:
    result = await db.execute(
        select(TrackLike.track_id).where(TrackLike.user_id == user_id)
    )
    return list(result.scalars().all())


async def find_user_favorites(user_id: int, db: AsyncSession) -> List[TrackView]:
    logger.debug("Searching for track favorites")
    track_ids = await find_liked_track_ids(user_id, db)
    logger.debug(f"Liked track ids for user {user_id}: {track_ids}")
    return await find_tracks_with_ids(track_ids, db)


async def delete_likes_of_track(track_id: int, db: AsyncSession) -> None:
    logger.debug(f"Deleting likes of track {track_id}")
    await db.execute(delete(TrackLike).where(TrackLike.track_id == track_id))
