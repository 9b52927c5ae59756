import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.core.security import get_current_user
from app.models.artist import Artist
from app.models.user import User
from app.schemas.artist import ArtistCreate, ArtistEnvelope, ArtistResponse, ArtistsEnvelope
from app.schemas.metadata import metadata_for
from app.schemas.track import TracksEnvelope
from app.services import artist_service, entry_store, track_query
from app.services.database import get_db, transaction

logger = logging.getLogger(__name__)

router = APIRouter()


async def _existing_artist(artist_id: int, db: AsyncSession) -> Artist:
    artist = await entry_store.find_entry_with_id(Artist, artist_id, db)
    if artist is None:
        raise NotFoundException("Artist", artist_id)
    return artist


@router.get("/artists/", response_model=ArtistsEnvelope)
async def list_artists(
    name: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    artists = await artist_service.find_all_artists(db, name=name)
    return ArtistsEnvelope(metadata=metadata_for(len(artists)), artists=[ArtistResponse.model_validate(artist) for artist in artists])


@router.post("/artists/", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
async def create_artist(
    artist_data: ArtistCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    artist = await entry_store.create_new_entry(Artist, artist_data.model_dump(), db)
    await db.commit()
    logger.info(f"Created artist {artist.id} ('{artist.name}')")
    return artist


@router.get("/artists/{artist_id}", response_model=ArtistEnvelope)
async def get_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    artist = await _existing_artist(artist_id, db)
    return ArtistEnvelope(metadata=metadata_for(1), artist=ArtistResponse.model_validate(artist))


@router.put("/artists/{artist_id}", response_model=ArtistResponse)
async def update_artist(
    artist_id: int,
    artist_data: ArtistCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_artist(artist_id, db)
    artist = await entry_store.update_entry_with_id(Artist, artist_id, artist_data.model_dump(), db)
    await db.commit()
    return artist


@router.delete("/artists/{artist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_artist(artist_id, db)
    async with transaction(db):
        await artist_service.delete_artist(artist_id, db)


@router.post("/artists/{artist_id}/follow", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
async def follow_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    artist = await _existing_artist(artist_id, db)
    async with transaction(db):
        await artist_service.follow(current_user.id, artist_id, db)
    return artist


@router.delete("/artists/{artist_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_artist(artist_id, db)
    async with transaction(db):
        await artist_service.unfollow(current_user.id, artist_id, db)


@router.get("/artists/{artist_id}/tracks", response_model=TracksEnvelope)
async def get_artist_tracks(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_artist(artist_id, db)
    tracks = await track_query.find_tracks_of_artist(artist_id, db)
    return TracksEnvelope(metadata=metadata_for(len(tracks)), tracks=tracks)
