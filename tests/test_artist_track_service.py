"""Tests for the artist <-> track link table maintenance."""

import pytest
from sqlalchemy import func, select

from app.models.track_artist import track_artist_association as links
from app.services import artist_track_service


async def _link_count(db_session, track_id):
    result = await db_session.execute(
        select(func.count()).select_from(links).where(links.c.track_id == track_id)
    )
    return result.scalar_one()


class TestArtistTrackService:

    @pytest.mark.asyncio
    async def test_insert_associations_links_every_artist(self, db_session, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, [])
        a1, a2, _, _ = catalog.artist_ids

        await artist_track_service.insert_associations(track.id, [a1, a2], db_session)
        await db_session.commit()

        assert await artist_track_service.find_artist_ids_of_track(track.id, db_session) == {a1, a2}

    @pytest.mark.asyncio
    async def test_update_associations_is_minimal(self, db_session, catalog, make_track):
        a1, a2, a3, a4 = catalog.artist_ids
        track = await make_track("Come Together", catalog.albums[1].id, [a1, a2, a3])

        removed, added = await artist_track_service.update_associations(
            track.id, [a4, a3, a2], db_session
        )
        await db_session.commit()

        assert removed == {a1}
        assert added == {a4}
        assert await artist_track_service.find_artist_ids_of_track(track.id, db_session) == {a2, a3, a4}
        assert await _link_count(db_session, track.id) == 3

    @pytest.mark.asyncio
    async def test_update_associations_twice_is_a_noop(self, db_session, catalog, make_track):
        a1, a2, a3, a4 = catalog.artist_ids
        track = await make_track("Something", catalog.albums[1].id, [a1, a2, a3])

        await artist_track_service.update_associations(track.id, [a2, a3, a4], db_session)
        removed, added = await artist_track_service.update_associations(track.id, [a2, a3, a4], db_session)
        await db_session.commit()

        assert removed == set()
        assert added == set()
        assert await _link_count(db_session, track.id) == 3

    @pytest.mark.asyncio
    async def test_update_associations_keeps_untouched_link_rows(self, db_session, catalog, make_track):
        a1, a2, _, a4 = catalog.artist_ids
        track = await make_track("Here Comes the Sun", catalog.albums[1].id, [a1, a2])
        kept = await db_session.execute(
            select(links.c.artist_track_id).where(links.c.track_id == track.id, links.c.artist_id == a2)
        )
        kept_row_id = kept.scalar_one()

        await artist_track_service.update_associations(track.id, [a2, a4], db_session)
        await db_session.commit()

        still_there = await db_session.execute(
            select(links.c.artist_id).where(links.c.artist_track_id == kept_row_id)
        )
        assert still_there.scalar_one() == a2

    @pytest.mark.asyncio
    async def test_delete_associations_of_track(self, db_session, catalog, make_track):
        track = await make_track("Jealous Guy", catalog.albums[0].id, catalog.artist_ids[:2])
        other = await make_track("Oh Yoko!", catalog.albums[0].id, catalog.artist_ids[:1])

        await artist_track_service.delete_associations_of_track(track.id, db_session)
        await db_session.commit()

        assert await _link_count(db_session, track.id) == 0
        assert await _link_count(db_session, other.id) == 1
