from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from .artist import ArtistResponse # To represent artists associated with a track
from .metadata import Metadata

# Minimal album info nested in a track, avoids a circular import with album.py
class AlbumInfo(BaseModel):
    id: int
    name: str
    release_date: Optional[str] = None
    images: List[str] = []
    model_config = ConfigDict(from_attributes=True)

class TrackBase(BaseModel):
    name: str
    duration: Optional[int] = None

class TrackCreate(TrackBase):
    # Clients send the album id as camelCase "albumId"
    album_id: int = Field(alias="albumId")
    artists: List[int] = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True)

class TrackRate(BaseModel):
    rate: int = Field(ge=1, le=5)

class TrackView(TrackBase):
    """A track as the API returns it: its row plus artists, album and rating average."""
    id: int
    album_id: int
    href: str
    album: Optional[AlbumInfo] = None
    artists: List[ArtistResponse] = []
    popularity: float = 0

    model_config = ConfigDict(from_attributes=True)

class TracksEnvelope(BaseModel):
    metadata: Metadata
    tracks: List[TrackView]

class TrackEnvelope(BaseModel):
    metadata: Metadata
    track: TrackView

class Popularity(BaseModel):
    rate: float

class PopularityEnvelope(BaseModel):
    metadata: Metadata
    popularity: Popularity
