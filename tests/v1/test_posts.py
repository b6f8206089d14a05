# mypy: ignore-errors
"""Tests for the off-chain post store endpoints."""

import json

from fastapi import status
from sqlalchemy import func, select
from starlette.datastructures import UploadFile

from frog_backend.models import Post
from frog_backend.utils.hash import content_hash

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _post_count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(Post))


def test_create_post_from_json(client, db_session) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"text": "  Ribbit  ", "links": ["https://frog.example", "ftp://skip"]},
    )

    assert response.status_code == status.HTTP_200_OK
    digest = response.json()["contentHash"]
    assert digest == content_hash("Ribbit", ["https://frog.example"], [])

    post = db_session.get(Post, digest)
    assert post.text == "Ribbit"
    assert post.links == ["https://frog.example"]
    assert post.images == []
    assert (post.total_tip_micro_stx, post.tip_count) == (0, 0)


def test_identical_payload_is_stored_once(client, db_session) -> None:
    body = {"text": "same", "links": ["https://a.example"], "images": ["https://img.example/x.png"]}
    first = client.post("/api/v1/posts", json=body)
    second = client.post("/api/v1/posts", json=body)

    assert first.json()["contentHash"] == second.json()["contentHash"]
    assert _post_count(db_session) == 1


def test_create_post_from_form_with_json_encoded_lists(client) -> None:
    response = client.post(
        "/api/v1/posts",
        data={"text": "form post", "links": json.dumps(["https://a.example"]), "images": "not json"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["contentHash"] == content_hash("form post", ["https://a.example"], [])


def test_uploaded_image_is_stored_and_referenced(client, db_session, blob_store) -> None:
    response = client.post(
        "/api/v1/posts",
        data={"text": "with picture", "images": json.dumps(["https://ignored.example/a.png"])},
        files={"image": ("Frog.PNG", PNG_BYTES, "image/png")},
    )

    assert response.status_code == status.HTTP_200_OK
    post = db_session.get(Post, response.json()["contentHash"])
    assert len(post.images) == 1
    image_url = post.images[0]
    assert image_url.startswith("http://test/uploads/")
    assert image_url.endswith(".png")

    blob_name = image_url.rsplit("/", 1)[-1]
    assert (blob_store.root / blob_name).read_bytes() == PNG_BYTES


def test_non_image_upload_is_ignored(client, db_session, blob_store) -> None:
    response = client.post(
        "/api/v1/posts",
        data={"text": "not a picture"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == status.HTTP_200_OK
    post = db_session.get(Post, response.json()["contentHash"])
    assert post.images == []
    assert list(blob_store.root.iterdir()) == []


def test_oversized_image_is_rejected(client, blob_store, mocker) -> None:
    from frog_backend.api.v1 import dependencies

    mocker.patch.object(dependencies.settings, "max_image_size_bytes", 1024 * 1024)
    response = client.post(
        "/api/v1/posts",
        data={"text": "too big"},
        files={"image": ("big.png", b"\x00" * (1024 * 1024 + 1), "image/png")},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "image max size is 1MB"}
    assert list(blob_store.root.iterdir()) == []


def test_oversized_upload_is_read_only_up_to_the_limit(client, blob_store, mocker) -> None:
    from frog_backend.api.v1 import dependencies

    limit = 1024 * 1024
    mocker.patch.object(dependencies.settings, "max_image_size_bytes", limit)
    read_spy = mocker.spy(UploadFile, "read")

    response = client.post(
        "/api/v1/posts",
        data={"text": "much too big"},
        files={"image": ("big.png", b"\x00" * (3 * limit), "image/png")},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert [call.args[1:] for call in read_spy.call_args_list] == [(limit + 1,)]
    assert list(blob_store.root.iterdir()) == []


def test_invalid_text_rejects_post_and_upload(client, blob_store, db_session) -> None:
    response = client.post(
        "/api/v1/posts",
        data={"text": "   "},
        files={"image": ("a.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "text is required"}
    assert list(blob_store.root.iterdir()) == []
    assert _post_count(db_session) == 0


def test_text_length_limit(client) -> None:
    response = client.post("/api/v1/posts", json={"text": "x" * 501})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "text max length is 500"}


def test_posts_by_hash_returns_known_posts(client) -> None:
    digest = client.post("/api/v1/posts", json={"text": "lookup me"}).json()["contentHash"]
    unknown = "f" * 64

    response = client.get("/api/v1/posts/by-hash", params={"hashes": f"{digest.upper()}, {unknown},short"})

    assert response.status_code == status.HTTP_200_OK
    posts = response.json()["posts"]
    assert list(posts) == [digest]
    assert posts[digest]["text"] == "lookup me"
    assert posts[digest]["contentHash"] == digest
    assert posts[digest]["totalTipMicroStx"] == "0"
    assert posts[digest]["tipCount"] == 0
    assert posts[digest]["createdAt"]


def test_posts_by_hash_without_hashes(client) -> None:
    response = client.get("/api/v1/posts/by-hash")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"posts": {}}


def test_delete_post_removes_row_and_uploaded_image(client, db_session, blob_store) -> None:
    created = client.post(
        "/api/v1/posts",
        data={"text": "short lived"},
        files={"image": ("a.jpg", PNG_BYTES, "image/jpeg")},
    )
    digest = created.json()["contentHash"]
    assert len(list(blob_store.root.iterdir())) == 1

    response = client.delete(f"/api/v1/posts/{digest}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True, "deleted": True}
    assert _post_count(db_session) == 0
    assert list(blob_store.root.iterdir()) == []


def test_delete_unknown_post(client) -> None:
    response = client.delete(f"/api/v1/posts/{'e' * 64}")
    assert response.json() == {"ok": True, "deleted": False}


def test_delete_rejects_invalid_hash(client) -> None:
    response = client.delete("/api/v1/posts/not-a-hash")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "invalid hash"}
