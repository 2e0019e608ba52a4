import pytest

from docmanual.api.http.admin import get_image_store
from docmanual.core.auth import get_optional_user
from docmanual.domains.identity.entities import User
from docmanual.domains.media.services import ImageStore
from docmanual.main import app


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_documents_hides_content(client):
    response = client.get("/api/docs")
    assert response.status_code == 200
    docs = response.json()
    assert {doc["title"] for doc in docs} == {"Welcome", "User guide"}
    for doc in docs:
        assert "content" not in doc
        assert set(doc) >= {"id", "title", "category", "createdAt"}


def test_seeded_documents_have_no_update_time(client):
    docs = client.get("/api/docs").json()
    assert all(doc["updatedAt"] is None for doc in docs)


def test_list_documents_by_category(client):
    docs = client.get("/api/docs", params={"category": "Guide"}).json()
    assert [doc["title"] for doc in docs] == ["User guide"]


def test_get_document_includes_content(client):
    doc_id = client.get("/api/docs").json()[0]["id"]
    doc = client.get(f"/api/docs/{doc_id}").json()
    assert doc["id"] == doc_id
    assert "content" in doc


def test_get_missing_document(client):
    response = client.get("/api/docs/1")
    assert response.status_code == 404
    assert response.json()["detail"] == "Document not found"


def test_rendered_missing_document(client):
    response = client.get("/api/docs/1/rendered")
    assert response.status_code == 404
    assert response.json()["detail"] == "Document not found"


@pytest.mark.parametrize("path", [
    "/api/docs/99999999999999999999999",
    "/api/docs/99999999999999999999999/rendered",
    "/api/docs/-1",
])
def test_document_id_out_of_range(client, path):
    assert client.get(path).status_code == 422


def test_rendered_document(client):
    docs = client.get("/api/docs", params={"category": "Home"}).json()
    rendered = client.get(f"/api/docs/{docs[0]['id']}/rendered").json()
    assert rendered["title"] == "Welcome"
    assert rendered["html"].startswith("<h1>Welcome to the online manual</h1>")
    assert "<ul><li>" in rendered["html"]


def test_auth_status_anonymous(client):
    assert client.get("/api/auth").json() == {"loggedIn": False}


def test_login_success_sets_session(client):
    response = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "user": {"username": "admin", "role": "admin"}}

    status = client.get("/api/auth").json()
    assert status["loggedIn"] is True
    assert status["user"]["username"] == "admin"
    assert status["user"]["role"] == "admin"


def test_login_wrong_password(client):
    response = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401
    assert client.get("/api/auth").json() == {"loggedIn": False}


def test_logout_clears_session(admin_client):
    assert admin_client.post("/api/logout").json() == {"success": True}
    assert admin_client.get("/api/auth").json() == {"loggedIn": False}


def test_forged_session_cookie_is_ignored(client):
    client.cookies.set("docmanual_session", "not-a-token")
    assert client.get("/api/auth").json() == {"loggedIn": False}


@pytest.mark.parametrize("method, path", [
    ("post", "/api/admin/docs"),
    ("put", "/api/admin/docs/1"),
    ("delete", "/api/admin/docs/1"),
    ("get", "/api/admin/categories"),
    ("post", "/api/admin/password"),
])
def test_admin_endpoints_require_login(client, method, path):
    response = client.request(method.upper(), path, json={})
    assert response.status_code == 401


@pytest.fixture
def viewer_client(client):
    viewer = User(id=1, username="reader", password_hash="x", role="viewer")
    app.dependency_overrides[get_optional_user] = lambda: viewer
    yield client
    app.dependency_overrides.pop(get_optional_user, None)


@pytest.mark.parametrize("method, path", [
    ("post", "/api/admin/docs"),
    ("delete", "/api/admin/docs/1"),
    ("get", "/api/admin/categories"),
    ("post", "/api/admin/password"),
])
def test_admin_endpoints_forbid_non_admin(viewer_client, method, path):
    response = viewer_client.request(method.upper(), path, json={})
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin privileges required"


def test_create_document(admin_client, git_sync):
    response = admin_client.post(
        "/api/admin/docs",
        json={"title": "  Install  ", "content": "# Install", "category": "Guide"}
    )
    assert response.status_code == 201
    doc = response.json()
    assert doc["title"] == "Install"
    assert doc["category"] == "Guide"
    assert doc["content"] == "# Install"
    assert doc["updatedAt"] is not None
    assert git_sync.messages == ["Add document: Install"]

    assert admin_client.get(f"/api/docs/{doc['id']}").json()["content"] == "# Install"


def test_create_document_defaults(admin_client):
    doc = admin_client.post("/api/admin/docs", json={"title": "Bare"}).json()
    assert doc["content"] == ""
    assert doc["category"] == "Uncategorized"


def test_create_document_rejects_blank_title(admin_client):
    response = admin_client.post("/api/admin/docs", json={"title": "   "})
    assert response.status_code == 422


def test_document_ids_increase(admin_client):
    first = admin_client.post("/api/admin/docs", json={"title": "A"}).json()
    second = admin_client.post("/api/admin/docs", json={"title": "B"}).json()
    assert second["id"] > first["id"]


def test_update_document(admin_client, git_sync):
    doc = admin_client.post("/api/admin/docs", json={"title": "Draft", "content": "old"}).json()

    response = admin_client.put(f"/api/admin/docs/{doc['id']}", json={"content": "new"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Draft"
    assert updated["content"] == "new"
    assert updated["updatedAt"] >= doc["updatedAt"]
    assert git_sync.messages[-1] == "Update document: Draft"


def test_update_missing_document(admin_client):
    response = admin_client.put("/api/admin/docs/1", json={"title": "x"})
    assert response.status_code == 404


def test_admin_document_id_out_of_range(admin_client):
    huge = "/api/admin/docs/99999999999999999999999"
    assert admin_client.put(huge, json={"title": "x"}).status_code == 422
    assert admin_client.delete(huge).status_code == 422


def test_recently_updated_documents_come_first(admin_client):
    doc = admin_client.post("/api/admin/docs", json={"title": "Fresh"}).json()
    assert admin_client.get("/api/docs").json()[0]["id"] == doc["id"]


def test_delete_document(admin_client, git_sync):
    doc = admin_client.post("/api/admin/docs", json={"title": "Temp"}).json()

    response = admin_client.delete(f"/api/admin/docs/{doc['id']}")
    assert response.json() == {"success": True}
    assert admin_client.get(f"/api/docs/{doc['id']}").status_code == 404
    assert git_sync.messages[-1] == f"Delete document {doc['id']}"

    assert admin_client.delete(f"/api/admin/docs/{doc['id']}").status_code == 404


def test_categories(admin_client):
    admin_client.post("/api/admin/docs", json={"title": "X", "category": "Guide"})
    admin_client.post("/api/admin/docs", json={"title": "Y", "category": "FAQ"})
    assert admin_client.get("/api/admin/categories").json() == ["Home", "Guide", "FAQ"]


def test_change_password(admin_client):
    response = admin_client.post(
        "/api/admin/password",
        json={"oldPassword": "admin123", "newPassword": "s3cret-pass"}
    )
    assert response.json() == {"success": True}

    admin_client.post("/api/logout")
    assert admin_client.post(
        "/api/login", json={"username": "admin", "password": "admin123"}
    ).status_code == 401
    assert admin_client.post(
        "/api/login", json={"username": "admin", "password": "s3cret-pass"}
    ).status_code == 200


def test_change_password_wrong_old_password(admin_client):
    response = admin_client.post(
        "/api/admin/password",
        json={"oldPassword": "wrong", "newPassword": "s3cret-pass"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Current password is incorrect"


def test_change_password_weak_new_password(admin_client):
    response = admin_client.post(
        "/api/admin/password",
        json={"oldPassword": "admin123", "newPassword": "short"}
    )
    assert response.status_code == 422


def test_upload_image(admin_client, upload_dir):
    response = admin_client.post(
        "/api/admin/upload",
        files={"image": ("shot.png", b"\x89PNG fake", "image/png")}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["url"].startswith("/uploads/")
    assert body["url"].endswith(".png")

    name = body["url"].rsplit("/", 1)[1]
    assert (upload_dir / name).read_bytes() == b"\x89PNG fake"
    assert admin_client.get(body["url"]).content == b"\x89PNG fake"


def test_upload_rejects_non_images(admin_client):
    response = admin_client.post(
        "/api/admin/upload",
        files={"image": ("notes.txt", b"hello", "text/plain")}
    )
    assert response.status_code == 400


def test_upload_rejects_oversized_image(admin_client, upload_dir):
    small_store = ImageStore(upload_dir=str(upload_dir), url_prefix="/uploads", max_bytes=16)
    app.dependency_overrides[get_image_store] = lambda: small_store
    try:
        response = admin_client.post(
            "/api/admin/upload",
            files={"image": ("big.png", b"x" * 1024, "image/png")}
        )
    finally:
        app.dependency_overrides.pop(get_image_store, None)
    assert response.status_code == 400
    assert response.json()["detail"] == "Image is larger than 16 bytes"


def test_upload_rejects_svg(admin_client):
    response = admin_client.post(
        "/api/admin/upload",
        files={"image": ("logo.svg", b"<svg onload=\"alert(1)\"/>", "image/svg+xml")}
    )
    assert response.status_code == 400


def test_upload_requires_admin(client):
    response = client.post(
        "/api/admin/upload",
        files={"image": ("shot.png", b"data", "image/png")}
    )
    assert response.status_code == 401
