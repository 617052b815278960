from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone

import pytest
from tests.factories.gallery import AlbumFactory, PhotoFactory

BASE = "/api/mobile/gallery"


def _upload(client, headers, *, name="beach.jpg", mimetype="image/jpeg", content=b"jpegbytes", **form):
    data = {"file": (io.BytesIO(content), name, mimetype), **form}
    return client.post(
        f"{BASE}/photos/upload", data=data, content_type="multipart/form-data", headers=headers
    )


class TestUpload:
    def test_upload_stores_file_and_record(self, client, auth_headers, upload_dir):
        resp = _upload(client, auth_headers, tags="sea, sun ,", width="640", height="480")

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["originalName"] == "beach.jpg"
        assert data["mimeType"] == "image/jpeg"
        assert data["size"] == len(b"jpegbytes")
        assert data["tags"] == ["sea", "sun"]
        assert data["width"] == 640
        assert data["url"] == f"/uploads/images/{data['filename']}"
        assert data["filename"].endswith(".jpg")
        assert (upload_dir / data["filename"]).read_bytes() == b"jpegbytes"

    def test_upload_into_album(self, client, auth_headers):
        album = AlbumFactory()

        resp = _upload(client, auth_headers, albumId=str(album.id))

        assert resp.status_code == 201
        assert resp.get_json()["data"]["albumId"] == album.id

    def test_upload_into_foreign_album_is_not_found(self, client, auth_headers, upload_dir):
        album = AlbumFactory(created_by="user-2")
        before = set(upload_dir.iterdir())

        resp = _upload(client, auth_headers, albumId=str(album.id))

        assert resp.status_code == 404
        assert set(upload_dir.iterdir()) == before

    def test_non_media_file_is_rejected(self, client, auth_headers):
        resp = _upload(client, auth_headers, name="notes.txt", mimetype="text/plain")

        assert resp.status_code == 422
        assert "file" in resp.get_json()["details"]["errors"]["files"]

    def test_missing_file_is_rejected(self, client, auth_headers):
        resp = client.post(
            f"{BASE}/photos/upload",
            data={"tags": "x"},
            content_type="multipart/form-data",
            headers=auth_headers,
        )

        assert resp.status_code == 422
        assert resp.get_json()["details"]["errors"]["files"]["file"] == [
            "Missing data for required field."
        ]


class TestPhotos:
    def test_list_filters_by_type(self, client, auth_headers):
        image = PhotoFactory()
        video = PhotoFactory(mime_type="video/mp4", original_name="clip.mp4")
        PhotoFactory(uploaded_by="user-2")

        everything = client.get(f"{BASE}/personal/photos", headers=auth_headers).get_json()
        videos = client.get(f"{BASE}/personal/photos?type=videos", headers=auth_headers).get_json()

        assert everything["meta"]["total"] == 2
        assert {p["id"] for p in everything["data"]} == {image.id, video.id}
        assert [p["id"] for p in videos["data"]] == [video.id]

    def test_unknown_type_is_rejected(self, client, auth_headers):
        resp = client.get(f"{BASE}/personal/photos?type=gifs", headers=auth_headers)

        assert resp.status_code == 422
        assert "type" in resp.get_json()["details"]["errors"]["query"]

    def test_favorite_set_and_toggle(self, client, auth_headers):
        photo = PhotoFactory()

        set_on = client.post(
            f"{BASE}/photos/{photo.id}/favorite", json={"isFavorite": True}, headers=auth_headers
        )
        toggled = client.post(f"{BASE}/photos/{photo.id}/favorite", headers=auth_headers)

        assert set_on.get_json()["data"]["isFavorite"] is True
        assert toggled.get_json()["data"]["isFavorite"] is False

    def test_share_returns_link(self, client, auth_headers):
        photo = PhotoFactory()

        resp = client.post(f"{BASE}/photos/{photo.id}/share", json={}, headers=auth_headers)

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["shareUrl"].startswith("https://share.example.test/photos/")
        assert data["shareId"].startswith(f"share-{photo.id}-")
        assert datetime.fromisoformat(data["expiresAt"]) > datetime.now(timezone.utc)

    def test_share_expiry_must_be_in_future(self, client, auth_headers):
        photo = PhotoFactory()
        past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()

        resp = client.post(
            f"{BASE}/photos/{photo.id}/share", json={"expiresAt": past}, headers=auth_headers
        )

        assert resp.status_code == 422
        assert "expiresAt" in resp.get_json()["details"]["errors"]["body"]

    def test_delete_removes_record_and_file(self, client, auth_headers, upload_dir):
        uploaded = _upload(client, auth_headers).get_json()["data"]

        resp = client.delete(f"{BASE}/photos/{uploaded['id']}", headers=auth_headers)

        assert resp.status_code == 204
        assert not (upload_dir / uploaded["filename"]).exists()
        listing = client.get(f"{BASE}/personal/photos", headers=auth_headers).get_json()
        assert uploaded["id"] not in {p["id"] for p in listing["data"]}

    @pytest.mark.parametrize("method", ["delete", "post"])
    def test_foreign_photo_is_not_found(self, client, other_auth_headers, method):
        photo = PhotoFactory()
        url = f"{BASE}/photos/{photo.id}" if method == "delete" else f"{BASE}/photos/{photo.id}/favorite"

        resp = getattr(client, method)(url, headers=other_auth_headers)

        assert resp.status_code == 404


class TestAlbumsAndStats:
    def test_create_and_list_albums_with_counts(self, client, auth_headers):
        created = client.post(
            f"{BASE}/albums", json={"name": "Trips", "isPublic": True}, headers=auth_headers
        )
        assert created.status_code == 201
        album_id = created.get_json()["data"]["id"]
        assert created.get_json()["data"]["photoCount"] == 0
        PhotoFactory(album_id=album_id)
        PhotoFactory(album_id=album_id)

        resp = client.get(f"{BASE}/albums", headers=auth_headers)

        albums = resp.get_json()["data"]
        assert [(a["name"], a["photoCount"], a["isPublic"]) for a in albums] == [("Trips", 2, True)]

    @pytest.mark.parametrize("body", [{}, {"name": "    "}])
    def test_album_name_is_required(self, client, auth_headers, body):
        resp = client.post(f"{BASE}/albums", json=body, headers=auth_headers)

        assert resp.status_code == 422
        assert "name" in resp.get_json()["details"]["errors"]["body"]

    def test_stats(self, client, auth_headers):
        AlbumFactory()
        PhotoFactory(size=300, is_favorite=True)
        PhotoFactory(size=200, mime_type="video/mp4")
        PhotoFactory(size=50, uploaded_at=datetime.now(timezone.utc) - timedelta(days=30))

        data = client.get(f"{BASE}/stats", headers=auth_headers).get_json()["data"]

        assert data["totalPhotos"] == 2
        assert data["totalVideos"] == 1
        assert data["totalSize"] == 550
        assert data["albumCount"] == 1
        assert data["favoriteCount"] == 1
        assert data["recentCount"] == 2
        assert data["storageLimit"] == 1000
        assert data["storagePercentage"] == 55.0
