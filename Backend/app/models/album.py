from sqlalchemy import Column, Integer, String, JSON
from app.services.database import Base

# Tracks point at albums by id without a foreign key, so that an album can
# be deleted while its tracks survive as orphans.
ORPHAN_ALBUM_ID = -1

class Album(Base):
    __tablename__ = "albums"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    release_date = Column(String, nullable=True)
    genres = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
