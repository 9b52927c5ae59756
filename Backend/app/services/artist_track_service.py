import logging
from typing import Iterable, Set, Tuple

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.track_artist import track_artist_association as links

logger = logging.getLogger(__name__)


async def find_artist_ids_of_track(track_id: int, db: AsyncSession) -> Set[int]:
    result = await db.execute(
        select(links.c.artist_id).where(links.c.track_id == track_id)
    )
    return set(result.scalars().all())


async def insert_associations(track_id: int, artist_ids: Iterable[int], db: AsyncSession) -> None:
    """
    Link a track to each artist. No duplicate check: only call this for a
    track that has no links yet.
    """
    rows = [{"artist_id": artist_id, "track_id": track_id} for artist_id in artist_ids]
    if not rows:
        return
    logger.debug(f"Linking track {track_id} to artists {[row['artist_id'] for row in rows]}")
    await db.execute(insert(links), rows)


async def update_associations(
    track_id: int,
    new_artist_ids: Iterable[int],
    db: AsyncSession
) -> Tuple[Set[int], Set[int]]:
    """
    Make the track's artist links match `new_artist_ids` with the fewest writes.

    Links to artists no longer listed are deleted, links to newly listed
    artists are inserted and links present in both are left alone.

    Returns:
        (removed_artist_ids, added_artist_ids)
    """
    current = await find_artist_ids_of_track(track_id, db)
    wanted = set(new_artist_ids)

    removed = current - wanted
    added = wanted - current

    if removed:
        await db.execute(
            delete(links).where(
                links.c.track_id == track_id,
                links.c.artist_id.in_(removed)
            )
        )
    if added:
        await insert_associations(track_id, sorted(added), db)

    logger.debug(f"Track {track_id} artist links: removed {sorted(removed)}, added {sorted(added)}")
    return removed, added


async def delete_associations_of_track(track_id: int, db: AsyncSession) -> None:
    logger.debug(f"Deleting artist links of track {track_id}")
    await db.execute(delete(links).where(links.c.track_id == track_id))


async def delete_associations_of_artist(artist_id: int, db: AsyncSession) -> None:
    logger.debug(f"Deleting track links of artist {artist_id}")
    await db.execute(delete(links).where(links.c.artist_id == artist_id))
