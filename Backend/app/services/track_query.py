"""
Read model for tracks.

Every public finder goes through `_tracks_statement`, which joins a track
with its album (if any), the average of its ratings and eager-loads its
artists. Tracks without at least one linked, existing artist never show up,
except through `find_track_with_id(..., require_artist=False)`.
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.album import Album
from app.models.artist import Artist
from app.models.track import Track
from app.models.track_artist import track_artist_association
from app.models.track_rating import TrackRating
from app.schemas.artist import ArtistResponse
from app.schemas.track import AlbumInfo, TrackView

logger = logging.getLogger(__name__)


def track_href(track_id: int) -> str:
    return f"{settings.BASE_URL}/api/tracks/{track_id}"


def _tracks_statement(*filters, require_artist: bool = True):
    ratings = (
        select(
            TrackRating.track_id.label("track_id"),
            func.avg(TrackRating.rating).label("popularity")
        )
        .group_by(TrackRating.track_id)
        .subquery()
    )
    linked_track_ids = (
        select(track_artist_association.c.track_id)
        .join(Artist, Artist.id == track_artist_association.c.artist_id)
    )
    if require_artist:
        filters = (Track.id.in_(linked_track_ids),) + filters
    return (
        select(Track, Album, func.coalesce(ratings.c.popularity, 0).label("popularity"))
        .select_from(Track)
        .outerjoin(Album, Album.id == Track.album_id)
        .outerjoin(ratings, ratings.c.track_id == Track.id)
        .where(*filters)
        .options(selectinload(Track.artists))
        .order_by(Track.id)
        # Links and ratings are written with core statements; always re-read them.
        .execution_options(populate_existing=True)
    )


def _to_view(track: Track, album: Optional[Album], popularity) -> TrackView:
    # The link table allows duplicate pairs, the view must not.
    artists = {}
    for artist in track.artists:
        artists.setdefault(artist.id, artist)

    return TrackView(
        id=track.id,
        name=track.name,
        duration=track.duration,
        album_id=track.album_id,
        href=track_href(track.id),
        album=AlbumInfo.model_validate(album) if album is not None else None,
        artists=[ArtistResponse.model_validate(artist) for artist in artists.values()],
        popularity=float(popularity or 0),
    )


async def _find_tracks(db: AsyncSession, *filters, require_artist: bool = True) -> List[TrackView]:
    result = await db.execute(_tracks_statement(*filters, require_artist=require_artist))
    return [_to_view(track, album, popularity) for track, album, popularity in result.all()]


async def find_all_tracks(db: AsyncSession, name: Optional[str] = None) -> List[TrackView]:
    """
    List tracks, optionally filtered by a case-insensitive name substring.

    `name=None` means no filter and returns everything, while an explicit
    empty string returns nothing. Callers depend on that difference.
    """
    logger.info("Finding tracks")
    if name == "":
        return []
    if name:
        return await _find_tracks(db, Track.name.ilike(f"%{name}%"))
    return await _find_tracks(db)


async def find_track_with_id(track_id: int, db: AsyncSession, require_artist: bool = True) -> Optional[TrackView]:
    """`require_artist=False` also returns a track that has no linked artists."""
    logger.info(f"Finding track {track_id}")
    tracks = await _find_tracks(db, Track.id == track_id, require_artist=require_artist)
    return tracks[0] if tracks else None


async def find_tracks_with_ids(track_ids: Sequence[int], db: AsyncSession) -> List[TrackView]:
    logger.info("Finding tracks with selected ids")
    if not track_ids:
        return []
    return await _find_tracks(db, Track.id.in_(set(track_ids)))


async def find_tracks_with_album_id(album_id: int, db: AsyncSession) -> List[TrackView]:
    logger.info(f"Finding tracks of album {album_id}")
    return await _find_tracks(db, Track.album_id == album_id)


async def find_tracks_with_albums_ids(album_ids: Sequence[int], db: AsyncSession) -> List[TrackView]:
    logger.info("Finding tracks with albums ids")
    if not album_ids:
        return []
    return await _find_tracks(db, Track.album_id.in_(set(album_ids)))


async def find_tracks_of_artist(artist_id: int, db: AsyncSession) -> List[TrackView]:
    logger.info(f"Finding tracks of artist {artist_id}")
    artist_track_ids = (
        select(track_artist_association.c.track_id)
        .where(track_artist_association.c.artist_id == artist_id)
    )
    return await _find_tracks(db, Track.id.in_(artist_track_ids))
