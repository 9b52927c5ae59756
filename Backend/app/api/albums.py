import logging
from collections import defaultdict
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.core.security import get_current_user
from app.models.album import Album
from app.models.track import Track
from app.models.user import User
from app.schemas.album import AlbumCreate, AlbumEnvelope, AlbumResponse, AlbumsEnvelope
from app.schemas.metadata import metadata_for
from app.schemas.track import TracksEnvelope, TrackView
from app.services import entry_store, rating_service, track_query
from app.services.database import get_db, transaction


logger = logging.getLogger(__name__)


router = APIRouter()


def _album_response(album: Album, tracks: List[TrackView]) -> AlbumResponse:
    return AlbumResponse(
        id=album.id,
        name=album.name,
        release_date=album.release_date,
        genres=album.genres or [],
        images=album.images or [],
        tracks=tracks,
    )


async def _existing_album(album_id: int, db: AsyncSession) -> Album:
    album = await entry_store.find_entry_with_id(Album, album_id, db)
    if album is None:
        raise NotFoundException("Album", album_id)
    return album


@router.get("/albums/", response_model=AlbumsEnvelope)
async def list_albums(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    """List all albums with their tracks"""
    albums = await entry_store.find_all_entries(Album, db)
    tracks = await track_query.find_tracks_with_albums_ids([album.id for album in albums], db)

    tracks_by_album = defaultdict(list)
    for track in tracks:
        tracks_by_album[track.album_id].append(track)

    return AlbumsEnvelope(
        metadata=metadata_for(len(albums)),
        albums=[_album_response(album, tracks_by_album[album.id]) for album in albums]
    )


@router.post("/albums/", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    album_data: AlbumCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new album in our database"""
    album = await entry_store.create_new_entry(Album, album_data.model_dump(), db)
    await db.commit()
    logger.info(f"Created album {album.id} ('{album.name}')")
    return _album_response(album, [])


# Dynamic routes after static ones
@router.get("/albums/{album_id}", response_model=AlbumEnvelope)
async def read_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    album = await _existing_album(album_id, db)
    tracks = await track_query.find_tracks_with_album_id(album_id, db)
    return AlbumEnvelope(metadata=metadata_for(1), album=_album_response(album, tracks))


@router.put("/albums/{album_id}", response_model=AlbumResponse)
async def update_album(
    album_id: int,
    album_data: AlbumCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_album(album_id, db)
    album = await entry_store.update_entry_with_id(Album, album_id, album_data.model_dump(), db)
    await db.commit()
    tracks = await track_query.find_tracks_with_album_id(album_id, db)
    return _album_response(album, tracks)


@router.delete("/albums/{album_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete an album. Its tracks are kept and become orphans."""
    await _existing_album(album_id, db)
    async with transaction(db):
        await rating_service.remove_tracks_from_album(album_id, db)
        await entry_store.delete_entry_with_id(Album, album_id, db)
    logger.info(f"Deleted album {album_id}")


@router.get("/albums/{album_id}/tracks", response_model=TracksEnvelope)
async def get_album_tracks(
    album_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_album(album_id, db)
    tracks = await track_query.find_tracks_with_album_id(album_id, db)
    return TracksEnvelope(metadata=metadata_for(len(tracks)), tracks=tracks)


@router.put("/albums/{album_id}/tracks/{track_id}", response_model=TrackView)
async def add_track_to_album(
    album_id: int,
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Move a track into this album."""
    await _existing_album(album_id, db)
    if await entry_store.find_entry_with_id(Track, track_id, db) is None:
        raise NotFoundException("Track", track_id)

    async with transaction(db):
        await rating_service.update_album_id(track_id, album_id, db)

    track = await track_query.find_track_with_id(track_id, db)
    if track is None:
        raise NotFoundException("Track", track_id)
    return track


@router.delete("/albums/{album_id}/tracks/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_track_from_album(
    album_id: int,
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_album(album_id, db)
    track = await entry_store.find_entry_with_id(Track, track_id, db)
    if track is None or track.album_id != album_id:
        raise NotFoundException("Track", track_id)

    async with transaction(db):
        await rating_service.delete_album_id(track_id, db)
