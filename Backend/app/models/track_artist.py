from sqlalchemy import Table, Column, Integer, ForeignKey
from app.services.database import Base

# This is NOT a model class, it's a direct Table definition.
# The surrogate key means (artist_id, track_id) pairs are not unique at the
# store level; artist_track_service diffs before inserting.
track_artist_association = Table(
    'artists_tracks',
    Base.metadata,
    Column('artist_track_id', Integer, primary_key=True, autoincrement=True),
    Column('artist_id', Integer, ForeignKey('artists.id'), nullable=False, index=True),
    Column('track_id', Integer, ForeignKey('tracks.id'), nullable=False, index=True)
)
