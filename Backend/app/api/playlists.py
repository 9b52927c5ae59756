from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.database import get_db, transaction
from app.models.playlist import Playlist
from app.models.track import Track
from app.models.user import User
from app.schemas.metadata import metadata_for
from app.schemas.playlist import PlaylistCreate, PlaylistEnvelope, PlaylistResponse, PlaylistsEnvelope
from app.core.exceptions import NotFoundException
from app.core.security import get_current_user
from app.services import entry_store, playlist_service

router = APIRouter()


async def _owned_playlist(playlist_id: int, current_user: User, db: AsyncSession) -> Playlist:
    playlist = await entry_store.find_entry_with_id(Playlist, playlist_id, db)
    if playlist is None:
        raise NotFoundException("Playlist", playlist_id)

    # Check if the current user is the owner of the playlist
    if playlist.owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this playlist"
        )
    return playlist


@router.post("/playlists/", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(playlist_data: PlaylistCreate, db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    # Create new playlist, automatically assigning it to the logged-in user
    playlist = await entry_store.create_new_entry(
        Playlist,
        {"name": playlist_data.name, "description": playlist_data.description, "owner_id": current_user.id},
        db
    )
    await db.commit()
    # A new playlist has no tracks yet
    return PlaylistResponse(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner_id=playlist.owner_id,
        tracks=[]
    )


@router.get("/playlists/", response_model=PlaylistsEnvelope)
async def list_playlists(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    playlists = await entry_store.find_all_entries(Playlist, db)
    responses = [await playlist_service.playlist_with_tracks(playlist, db) for playlist in playlists]
    return PlaylistsEnvelope(metadata=metadata_for(len(responses)), playlists=responses)


@router.get("/playlists/{playlist_id}", response_model=PlaylistEnvelope)
async def get_playlist(playlist_id: int, db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    playlist = await entry_store.find_entry_with_id(Playlist, playlist_id, db)
    if playlist is None:
        raise NotFoundException("Playlist", playlist_id)
    return PlaylistEnvelope(
        metadata=metadata_for(1),
        playlist=await playlist_service.playlist_with_tracks(playlist, db)
    )


@router.delete("/playlists/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(playlist_id: int, db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    await _owned_playlist(playlist_id, current_user, db)
    async with transaction(db):
        await playlist_service.delete_playlist(playlist_id, db)


@router.post("/playlists/{playlist_id}/tracks/{track_id}", response_model=PlaylistResponse)
async def add_track_to_playlist(
    playlist_id: int,
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    playlist = await _owned_playlist(playlist_id, current_user, db)

    if await entry_store.find_entry_with_id(Track, track_id, db) is None:
        raise NotFoundException("Track", track_id)

    # Adding a track that is already in the playlist changes nothing
    async with transaction(db):
        await playlist_service.add_track(playlist_id, track_id, db)

    return await playlist_service.playlist_with_tracks(playlist, db)


@router.delete("/playlists/{playlist_id}/tracks/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_track_from_playlist(
    playlist_id: int,
    track_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await _owned_playlist(playlist_id, current_user, db)

    # Removing a track that is not in the playlist silently succeeds
    async with transaction(db):
        await playlist_service.remove_track(playlist_id, track_id, db)
