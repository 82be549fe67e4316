import os
import uuid

import pytest
import requests

API_BASE = os.environ.get("MEDIAHUB_API_BASE")

pytestmark = pytest.mark.skipif(
    not API_BASE, reason="set MEDIAHUB_API_BASE to run against a live server"
)


def upload_media(filename, data, content_type):
    files = {"file": (filename, data, content_type)}
    r = requests.post(f"{API_BASE}/media", files=files, timeout=60)
    assert r.status_code == 200, f"upload failed: {r.status_code} {r.text}"
    return r.json()["file"]


def fetch(url):
    return requests.get(url, timeout=30)


def delete_media(name):
    return requests.delete(f"{API_BASE}/media/{name}", timeout=30)


def test_full_e2e_flow():
    """
    Smoke test against a running server:

    1. /api answers.
    2. Upload a small JPEG.
    3. Download it from the returned URL.
    4. Reject a disallowed type.
    5. Delete it, then confirm it is gone.
    """

    # --- 1. liveness
    r = requests.get(f"{API_BASE}/api", timeout=10)
    assert r.status_code == 200, f"api check failed: {r.status_code} {r.text}"
    assert r.json() == {"message": "API is working!"}

    # --- 2. upload
    payload = b"\xff\xd8\xff" + uuid.uuid4().bytes[:7]
    info = upload_media("photo.jpg", payload, "image/jpeg")
    assert info["name"].endswith(".jpg")
    assert info["url"].endswith(f"/uploads/{info['name']}")

    # --- 3. download
    r = fetch(info["url"])
    assert r.status_code == 200
    assert r.content == payload
    assert r.headers["content-type"].startswith("image/jpeg")

    # --- 4. rejected type
    r = requests.post(
        f"{API_BASE}/media",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        timeout=30,
    )
    assert r.status_code == 415, f"expected 415, got {r.status_code} {r.text}"

    # --- 5. delete
    r = delete_media(info["name"])
    assert r.status_code == 200, f"delete failed: {r.status_code} {r.text}"
    assert fetch(info["url"]).status_code == 404
    assert delete_media(info["name"]).status_code == 404
