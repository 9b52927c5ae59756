from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from app.services.database import Base

class TrackLike(Base):
    __tablename__ = "users_tracks"
    __table_args__ = (
        UniqueConstraint("user_id", "track_id", name="uq_users_tracks_user_track"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    track_id = Column(Integer, ForeignKey("tracks.id"), nullable=False, index=True)
