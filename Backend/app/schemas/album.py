from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from .metadata import Metadata
from .track import TrackView

class AlbumBase(BaseModel):
    name: str
    release_date: Optional[str] = None
    genres: List[str] = []
    images: List[str] = []

class AlbumCreate(AlbumBase):
    pass

class AlbumResponse(AlbumBase):
    id: int

    # Filled from the track aggregator, not from an ORM relationship
    tracks: List[TrackView] = []

    model_config = ConfigDict(from_attributes=True)

class AlbumsEnvelope(BaseModel):
    metadata: Metadata
    albums: List[AlbumResponse]

class AlbumEnvelope(BaseModel):
    metadata: Metadata
    album: AlbumResponse
