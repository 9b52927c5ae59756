from sqlalchemy import Integer, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.services.database import Base

class TrackRating(Base):
    __tablename__ = "tracks_rating"
    __table_args__ = (
        # One rating per user per track; rating_service upserts against it.
        UniqueConstraint("user_id", "track_id", name="uq_tracks_rating_user_track"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_tracks_rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)
    track_id: Mapped[int] = mapped_column(Integer, ForeignKey("tracks.id"), index=True)

    # Copy of the track's album id for album-level rollups without a join.
    # Kept in sync by rating_service.update_album_id.
    album_id: Mapped[int] = mapped_column(Integer, index=True)
    rating: Mapped[int] = mapped_column(Integer)
