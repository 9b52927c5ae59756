from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from .metadata import Metadata
from .track import TrackView

class PlaylistBase(BaseModel):
    name: str
    description: Optional[str] = None

class PlaylistCreate(PlaylistBase):
    pass  # The owner is taken from the logged-in user

class PlaylistResponse(PlaylistBase):
    id: int
    owner_id: int
    tracks: List[TrackView] = []

    model_config = ConfigDict(from_attributes=True)  # Allows Pydantic to convert SQLAlchemy models to JSON

class PlaylistsEnvelope(BaseModel):
    metadata: Metadata
    playlists: List[PlaylistResponse]

class PlaylistEnvelope(BaseModel):
    metadata: Metadata
    playlist: PlaylistResponse
