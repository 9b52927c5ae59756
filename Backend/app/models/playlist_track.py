from sqlalchemy import Table, Column, ForeignKey, Integer
from app.services.database import Base

playlist_track = Table(
    'playlists_tracks',
    Base.metadata,
    Column('playlist_id', Integer, ForeignKey('playlists.id'), primary_key=True),
    Column('track_id', Integer, ForeignKey('tracks.id'), primary_key=True)
)
