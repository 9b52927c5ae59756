from sqlalchemy import Column, String, Integer, JSON
from sqlalchemy.orm import relationship
from app.models.track_artist import track_artist_association # For the many-to-many relationship

from app.services.database import Base

class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    popularity = Column(Integer, nullable=False, default=0)
    genres = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)

    # Read-only side of the many-to-many; link rows are written by artist_track_service
    tracks = relationship(
        "Track",
        secondary=track_artist_association,
        back_populates="artists",
        viewonly=True
    )
