import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.core.security import get_current_user
from app.models.track import Track
from app.models.user import User
from app.schemas.metadata import metadata_for
from app.schemas.track import (
    Popularity,
    PopularityEnvelope,
    TrackCreate,
    TrackEnvelope,
    TrackRate,
    TracksEnvelope,
    TrackView,
)
from app.services import rating_service, track_query
from app.services.database import get_db
from app.services.entry_store import find_entry_with_id
from app.services.track_service import TrackService, get_track_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _existing_track(track_id: int, db: AsyncSession) -> Track:
    track = await find_entry_with_id(Track, track_id, db)
    if track is None:
        raise NotFoundException("Track", track_id)
    return track


@router.get("/tracks/", response_model=TracksEnvelope)
async def list_tracks(
    name: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List tracks. `?name=` filters by name; an empty `?name=` matches nothing."""
    tracks = await track_query.find_all_tracks(db, name=name)
    return TracksEnvelope(metadata=metadata_for(len(tracks)), tracks=tracks)


@router.post("/tracks/", response_model=TrackView, status_code=status.HTTP_201_CREATED)
async def create_track(
    track_data: TrackCreate,
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    return await track_service.create_track(track_data)


@router.get("/tracks/{track_id}", response_model=TrackEnvelope)
async def get_track(
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    track = await track_query.find_track_with_id(track_id, db)
    if track is None:
        raise NotFoundException("Track", track_id)
    return TrackEnvelope(metadata=metadata_for(1), track=track)


@router.put("/tracks/{track_id}", response_model=TrackView)
async def update_track(
    track_id: int,
    track_data: TrackCreate,
    db: AsyncSession = Depends(get_db),
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    await _existing_track(track_id, db)
    return await track_service.update_track(track_data, track_id)


@router.delete("/tracks/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    track_id: int,
    db: AsyncSession = Depends(get_db),
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    await _existing_track(track_id, db)
    await track_service.delete_track(track_id)


@router.post("/tracks/{track_id}/like", response_model=TrackView, status_code=status.HTTP_201_CREATED)
async def like_track(
    track_id: int,
    db: AsyncSession = Depends(get_db),
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    # Liking an already liked track still answers 201
    await _existing_track(track_id, db)
    return await track_service.like_track(current_user.id, track_id)


@router.delete("/tracks/{track_id}/like", status_code=status.HTTP_204_NO_CONTENT)
async def dislike_track(
    track_id: int,
    db: AsyncSession = Depends(get_db),
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    await _existing_track(track_id, db)
    await track_service.dislike_track(current_user.id, track_id)


@router.get("/tracks/{track_id}/popularity", response_model=PopularityEnvelope)
async def get_track_popularity(
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _existing_track(track_id, db)
    rate = await rating_service.calculate_rate(track_id, db)
    return PopularityEnvelope(metadata=metadata_for(1), popularity=Popularity(rate=rate))


@router.post("/tracks/{track_id}/popularity", response_model=Popularity, status_code=status.HTTP_201_CREATED)
async def rate_track(
    track_id: int,
    rating: TrackRate,
    db: AsyncSession = Depends(get_db),
    track_service: TrackService = Depends(get_track_service),
    current_user: User = Depends(get_current_user)
):
    track = await _existing_track(track_id, db)
    await track_service.rate_track(track, current_user.id, rating.rate)
    return Popularity(rate=rating.rate)
