from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.database import get_db
from app.models.user import User
from app.schemas.artist import ArtistResponse, ArtistsEnvelope
from app.schemas.metadata import metadata_for
from app.schemas.track import TracksEnvelope
from app.schemas.user import UserResponse
from app.core.security import get_current_user
from app.services import artist_service, like_service

router = APIRouter()


@router.get("/users/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_user)):
    """
    Fetch the current logged-in user.
    """
    return current_user


@router.get("/users/me/tracks", response_model=TracksEnvelope)
async def get_favorite_tracks(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Tracks the current user liked."""
    tracks = await like_service.find_user_favorites(current_user.id, db)
    return TracksEnvelope(metadata=metadata_for(len(tracks)), tracks=tracks)


@router.get("/users/me/artists", response_model=ArtistsEnvelope)
async def get_favorite_artists(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Artists the current user follows."""
    artists = await artist_service.find_user_favorite_artists(current_user.id, db)
    return ArtistsEnvelope(metadata=metadata_for(len(artists)), artists=[ArtistResponse.model_validate(artist) for artist in artists])
