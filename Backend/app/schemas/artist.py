from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from .metadata import Metadata

class ArtistBase(BaseModel):
    name: str
    description: Optional[str] = None
    genres: List[str] = []
    images: List[str] = []

class ArtistCreate(ArtistBase):
    pass

class ArtistResponse(ArtistBase):
    id: int
    popularity: int = 0

    model_config = ConfigDict(from_attributes=True)

class ArtistsEnvelope(BaseModel):
    metadata: Metadata
    artists: List[ArtistResponse]

class ArtistEnvelope(BaseModel):
    metadata: Metadata
    artist: ArtistResponse
