import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.playlist import Playlist
from app.models.playlist_track import playlist_track
from app.schemas.playlist import PlaylistResponse
from app.services.entry_store import insert_for
from app.services.track_query import find_tracks_with_ids

logger = logging.getLogger(__name__)


async def find_track_ids_of_playlist(playlist_id: int, db: AsyncSession) -> List[int]:
    result = await db.execute(
        select(playlist_track.c.track_id).where(playlist_track.c.playlist_id == playlist_id)
    )
    return list(result.scalars().all())


async def playlist_with_tracks(playlist: Playlist, db: AsyncSession) -> PlaylistResponse:
    """Attach the playlist's track views to the playlist row."""
    track_ids = await find_track_ids_of_playlist(playlist.id, db)
    return PlaylistResponse(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner_id=playlist.owner_id,
        tracks=await find_tracks_with_ids(track_ids, db),
    )


async def add_track(playlist_id: int, track_id: int, db: AsyncSession) -> None:
    # Adding a track that is already there leaves the playlist as it is
    logger.debug(f"Adding track {track_id} to playlist {playlist_id}")
    insert = insert_for(db)
    await db.execute(
        insert(playlist_track)
        .values(playlist_id=playlist_id, track_id=track_id)
        .on_conflict_do_nothing(index_elements=["playlist_id", "track_id"])
    )


async def remove_track(playlist_id: int, track_id: int, db: AsyncSession) -> None:
    logger.debug(f"Removing track {track_id} from playlist {playlist_id}")
    await db.execute(
        delete(playlist_track).where(
            playlist_track.c.playlist_id == playlist_id,
            playlist_track.c.track_id == track_id
        )
    )


async def delete_associations_of_track(track_id: int, db: AsyncSession) -> None:
    """Take a track out of every playlist, used when the track is deleted."""
    logger.debug(f"Deleting playlist links of track {track_id}")
    await db.execute(delete(playlist_track).where(playlist_track.c.track_id == track_id))


async def delete_playlist(playlist_id: int, db: AsyncSession) -> None:
    logger.debug(f"Deleting playlist {playlist_id}")
    await db.execute(delete(playlist_track).where(playlist_track.c.playlist_id == playlist_id))
    await db.execute(delete(Playlist).where(Playlist.id == playlist_id))
