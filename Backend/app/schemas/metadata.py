from pydantic import BaseModel

from app.core.config import settings

class Metadata(BaseModel):
    version: str
    count: int

def metadata_for(count: int) -> Metadata:
    """Build the metadata block that wraps every read response."""
    return Metadata(version=settings.API_VERSION, count=count)
