import logging
from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.album import ORPHAN_ALBUM_ID
from app.models.track import Track
from app.models.track_rating import TrackRating
from app.services.entry_store import insert_for

logger = logging.getLogger(__name__)


async def rate(track: Track, user_id: int, rating: int, db: AsyncSession) -> None:
    """
    Store `user_id`'s rating of `track`, replacing any earlier one.

    The (user_id, track_id) unique constraint plus ON CONFLICT DO UPDATE keeps
    a single row per pair, also under concurrent requests.
    """
    logger.info(f"User {user_id} rating track {track.id} with rate: {rating}")
    insert = insert_for(db)
    stmt = insert(TrackRating).values(
        user_id=user_id,
        track_id=track.id,
        album_id=track.album_id,
        rating=rating,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[TrackRating.user_id, TrackRating.track_id],
        set_={"rating": stmt.excluded.rating, "album_id": stmt.excluded.album_id},
    )
    await db.execute(stmt)


async def find_user_rating(track_id: int, user_id: int, db: AsyncSession) -> Optional[TrackRating]:
    result = await db.execute(
        select(TrackRating).where(
            TrackRating.track_id == track_id,
            TrackRating.user_id == user_id
        )
    )
    return result.scalar_one_or_none()


async def calculate_rate(track_id: int, db: AsyncSession) -> float:
    """Arithmetic mean of the track's ratings, unrounded; 0 when nobody rated it."""
    logger.debug(f"Calculating rating for track {track_id}")
    result = await db.execute(
        select(TrackRating.rating).where(TrackRating.track_id == track_id)
    )
    ratings = result.scalars().all()
    if not ratings:
        return 0
    return sum(ratings) / len(ratings)


async def update_album_id(track_id: int, album_id: int, db: AsyncSession) -> None:
    """Move a track to another album, keeping the album id copied on its ratings in sync."""
    logger.debug(f"Updating track {track_id} albumId to {album_id}")
    await db.execute(update(Track).where(Track.id == track_id).values(album_id=album_id))
    await db.execute(
        update(TrackRating).where(TrackRating.track_id == track_id).values(album_id=album_id)
    )


async def remove_tracks_from_album(album_id: int, db: AsyncSession) -> None:
    """Orphan every track of the album. The tracks themselves are kept."""
    logger.debug(f"Removing tracks in album {album_id}")
    album_track_ids = select(Track.id).where(Track.album_id == album_id)
    await db.execute(
        update(TrackRating)
        .where(TrackRating.track_id.in_(album_track_ids))
        .values(album_id=ORPHAN_ALBUM_ID)
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        update(Track).where(Track.album_id == album_id).values(album_id=ORPHAN_ALBUM_ID)
    )


async def delete_album_id(track_id: int, db: AsyncSession) -> None:
    logger.debug(f"Leaving track {track_id} orphan")
    await update_album_id(track_id, ORPHAN_ALBUM_ID, db)


async def delete_ratings_of_track(track_id: int, db: AsyncSession) -> None:
    logger.debug(f"Deleting track {track_id} ratings")
    await db.execute(delete(TrackRating).where(TrackRating.track_id == track_id))
