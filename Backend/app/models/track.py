from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from app.services.database import Base
from app.models.album import ORPHAN_ALBUM_ID
from app.models.track_artist import track_artist_association

class Track(Base):
    __tablename__ = "tracks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    duration = Column(Integer, nullable=True)

    # Plain integer on purpose: ORPHAN_ALBUM_ID marks a track without album
    album_id = Column(Integer, nullable=False, default=ORPHAN_ALBUM_ID, index=True)

    # A track can have many artists (many-to-many relationship)
    artists = relationship(
        "Artist",
        secondary=track_artist_association,
        back_populates="tracks",
        viewonly=True
    )
