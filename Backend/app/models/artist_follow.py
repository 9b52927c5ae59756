from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from app.services.database import Base

class ArtistFollow(Base):
    __tablename__ = "users_artists"
    __table_args__ = (
        UniqueConstraint("user_id", "artist_id", name="uq_users_artists_user_artist"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=False, index=True)
