"""HTTP tests for /api/tracks."""

import pytest
from sqlalchemy import func, select

from app.models.track import Track
from app.models.track_like import TrackLike


class TestTracksAuth:

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client, catalog):
        response = await client.get("/api/tracks/")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_bad_token_is_401(self, client, catalog):
        response = await client.get("/api/tracks/", headers={"Authorization": "Bearer UNAUTHORIZED"})
        assert response.status_code == 401


class TestTracksRead:

    @pytest.mark.asyncio
    async def test_list_tracks_envelope(self, client, auth_headers, catalog, make_track):
        await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        response = await client.get("/api/tracks/", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["metadata"] == {"version": "1.0", "count": 1}
        assert body["tracks"][0]["name"] == "Imagine"
        assert body["tracks"][0]["artists"][0]["name"] == "John Lennon"

    @pytest.mark.asyncio
    async def test_name_filter(self, client, auth_headers, catalog, make_track):
        await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])
        await make_track("Something", catalog.albums[1].id, catalog.artist_ids[2:3])

        filtered = await client.get("/api/tracks/", params={"name": "IMAG"}, headers=auth_headers)
        empty = await client.get("/api/tracks/?name=", headers=auth_headers)

        assert [track["name"] for track in filtered.json()["tracks"]] == ["Imagine"]
        assert empty.json()["tracks"] == []
        assert empty.json()["metadata"]["count"] == 0

    @pytest.mark.asyncio
    async def test_get_track(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        response = await client.get(f"/api/tracks/{track.id}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()["track"]
        assert body["id"] == track.id
        assert body["album"]["name"] == "Imagine"
        assert body["href"].endswith(f"/api/tracks/{track.id}")
        assert body["popularity"] == 0

    @pytest.mark.asyncio
    async def test_get_unknown_track_is_404(self, client, auth_headers):
        response = await client.get("/api/tracks/4242", headers=auth_headers)
        assert response.status_code == 404


class TestTracksWrite:

    @pytest.mark.asyncio
    async def test_create_track(self, client, auth_headers, catalog):
        payload = {"name": "Imagine", "albumId": catalog.albums[0].id, "artists": catalog.artist_ids[:2]}

        response = await client.post("/api/tracks/", json=payload, headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Imagine"
        assert len(body["artists"]) == 2
        assert body["album"]["id"] == catalog.albums[0].id
        assert "popularity" in body

    @pytest.mark.asyncio
    async def test_create_with_missing_fields_is_422(self, client, auth_headers, catalog):
        response = await client.post("/api/tracks/", json={"name": "Imagine"}, headers=auth_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_with_unknown_artist_is_400(self, client, auth_headers, catalog, db_session):
        payload = {"name": "Imagine", "albumId": catalog.albums[0].id, "artists": [999]}

        response = await client.post("/api/tracks/", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Non existing artist."
        count = await db_session.execute(select(func.count()).select_from(Track))
        assert count.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_update_track(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])
        payload = {"name": "Imagine (Ultimate Mix)", "albumId": catalog.albums[1].id, "artists": catalog.artist_ids[1:3]}

        response = await client.put(f"/api/tracks/{track.id}", json=payload, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Imagine (Ultimate Mix)"
        assert body["album_id"] == catalog.albums[1].id
        assert sorted(artist["id"] for artist in body["artists"]) == catalog.artist_ids[1:3]

    @pytest.mark.asyncio
    async def test_update_unknown_track_is_404(self, client, auth_headers, catalog):
        payload = {"name": "Imagine", "albumId": catalog.albums[0].id, "artists": catalog.artist_ids[:1]}
        response = await client.put("/api/tracks/4242", json=payload, headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_track(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        response = await client.delete(f"/api/tracks/{track.id}", headers=auth_headers)
        again = await client.delete(f"/api/tracks/{track.id}", headers=auth_headers)

        assert response.status_code == 204
        assert again.status_code == 404


class TestTrackLikesAndRatings:

    @pytest.mark.asyncio
    async def test_like_twice_then_dislike(self, client, auth_headers, catalog, make_track, db_session):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])
        # The rollback below expires the instance
        track_id = track.id

        first = await client.post(f"/api/tracks/{track_id}/like", headers=auth_headers)
        second = await client.post(f"/api/tracks/{track_id}/like", headers=auth_headers)
        favorites = await client.get("/api/users/me/tracks", headers=auth_headers)

        assert first.status_code == 201
        assert second.status_code == 201
        assert [fav["id"] for fav in favorites.json()["tracks"]] == [track_id]
        count = await db_session.execute(select(func.count()).select_from(TrackLike))
        assert count.scalar_one() == 1
        await db_session.rollback()

        removed = await client.delete(f"/api/tracks/{track_id}/like", headers=auth_headers)
        removed_again = await client.delete(f"/api/tracks/{track_id}/like", headers=auth_headers)

        assert removed.status_code == 204
        assert removed_again.status_code == 204

    @pytest.mark.asyncio
    async def test_like_track_without_artists_returns_the_track(self, client, auth_headers, catalog, make_track):
        track = await make_track("Untitled demo", catalog.albums[0].id, [])

        response = await client.post(f"/api/tracks/{track.id}/like", headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == track.id
        assert body["name"] == "Untitled demo"
        assert body["artists"] == []
        assert body["album"]["id"] == catalog.albums[0].id

    @pytest.mark.asyncio
    async def test_like_unknown_track_is_404(self, client, auth_headers):
        response = await client.post("/api/tracks/4242/like", headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_popularity_starts_at_zero(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        response = await client.get(f"/api/tracks/{track.id}/popularity", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["popularity"]["rate"] == 0

    @pytest.mark.asyncio
    async def test_rating_updates_popularity(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        rated = await client.post(f"/api/tracks/{track.id}/popularity", json={"rate": 4}, headers=auth_headers)
        rerated = await client.post(f"/api/tracks/{track.id}/popularity", json={"rate": 2}, headers=auth_headers)
        popularity = await client.get(f"/api/tracks/{track.id}/popularity", headers=auth_headers)

        assert rated.status_code == 201
        assert rated.json() == {"rate": 4}
        assert rerated.status_code == 201
        assert popularity.json()["popularity"]["rate"] == 2

    @pytest.mark.asyncio
    async def test_rating_out_of_range_is_422(self, client, auth_headers, catalog, make_track):
        track = await make_track("Imagine", catalog.albums[0].id, catalog.artist_ids[:1])

        response = await client.post(f"/api/tracks/{track.id}/popularity", json={"rate": 6}, headers=auth_headers)

        assert response.status_code == 422
