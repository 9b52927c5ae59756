import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NonExistentIdError, NotFoundException
from app.models.album import Album
from app.models.artist import Artist
from app.models.track import Track
from app.schemas.track import TrackCreate, TrackView
from app.services import (
    artist_track_service,
    entry_store,
    like_service,
    playlist_service,
    rating_service,
    track_query,
)
from app.services.database import get_db, transaction

logger = logging.getLogger(__name__)


class TrackService:
    """Write workflows for tracks: check references, mutate, then re-read the view."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _find_artists(self, artist_ids: List[int]) -> List[Artist]:
        wanted = set(artist_ids)
        artists = await entry_store.find_entries_with_ids(Artist, wanted, self.db)
        if len(artists) < len(wanted):
            found = {artist.id for artist in artists}
            logger.warning(f"Req artists: {sorted(wanted)} vs DB artists: {sorted(found)}")
            raise NonExistentIdError("Non existing artist.")
        return artists

    async def _find_album(self, album_id: int) -> Album:
        album = await entry_store.find_entry_with_id(Album, album_id, self.db)
        if album is None:
            logger.warning(f"Req album: {album_id} not found in DB")
            raise NonExistentIdError("Non existing album.")
        return album

    async def _check_references(self, body: TrackCreate) -> None:
        # One AsyncSession cannot run statements concurrently, so these run in
        # sequence. Both finish before anything is written.
        await self._find_artists(body.artists)
        await self._find_album(body.album_id)

    async def create_track(self, body: TrackCreate) -> TrackView:
        logger.debug(f"Creating track with info: {body.model_dump()}")
        await self._check_references(body)

        async with transaction(self.db):
            track = await entry_store.create_new_entry(
                Track,
                {"name": body.name, "duration": body.duration, "album_id": body.album_id},
                self.db
            )
            artist_ids = list(dict.fromkeys(body.artists))
            await artist_track_service.insert_associations(track.id, artist_ids, self.db)

        logger.info(f"Created track {track.id} ('{track.name}') with artists {artist_ids}")
        # The insert does not populate artists, album or popularity
        return await track_query.find_track_with_id(track.id, self.db)

    async def update_track(self, body: TrackCreate, track_id: int) -> TrackView:
        logger.debug(f"Updating track {track_id}")
        await self._check_references(body)

        async with transaction(self.db):
            patch = {"name": body.name}
            # A body without duration keeps the stored one
            if "duration" in body.model_fields_set:
                patch["duration"] = body.duration
            track = await entry_store.update_entry_with_id(Track, track_id, patch, self.db)
            if track is None:
                raise NotFoundException("Track", track_id)
            await rating_service.update_album_id(track_id, body.album_id, self.db)
            await artist_track_service.update_associations(track_id, body.artists, self.db)

        logger.info(f"Updated track {track_id}")
        return await track_query.find_track_with_id(track_id, self.db)

    async def delete_track(self, track_id: int) -> None:
        """Delete the track with its ratings, likes and artist and playlist links."""
        logger.debug(f"Deleting track {track_id}")
        async with transaction(self.db):
            await artist_track_service.delete_associations_of_track(track_id, self.db)
            await playlist_service.delete_associations_of_track(track_id, self.db)
            await rating_service.delete_ratings_of_track(track_id, self.db)
            await like_service.delete_likes_of_track(track_id, self.db)
            await entry_store.delete_entry_with_id(Track, track_id, self.db)
        logger.info(f"Deleted track {track_id}")

    async def rate_track(self, track: Track, user_id: int, rating: int) -> float:
        """Rate the track and return its new average."""
        async with transaction(self.db):
            await rating_service.rate(track, user_id, rating, self.db)
        return await rating_service.calculate_rate(track.id, self.db)

    async def like_track(self, user_id: int, track_id: int) -> Optional[TrackView]:
        """Like the track and return it, also when it has no artists linked."""
        async with transaction(self.db):
            await like_service.like(user_id, track_id, self.db)
        return await track_query.find_track_with_id(track_id, self.db, require_artist=False)

    async def dislike_track(self, user_id: int, track_id: int) -> None:
        async with transaction(self.db):
            await like_service.dislike(user_id, track_id, self.db)


async def get_track_service(db: AsyncSession = Depends(get_db)) -> TrackService:
    return TrackService(db)
