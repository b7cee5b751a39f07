from conftest import ADMIN_EMAIL, GUEST_EMAIL, PASSWORD, png_bytes, sign_up
from hotel_site.core.dependencies import get_avatar_uploader
from hotel_site.main import app
from hotel_site.utils.cloudinary_utils import path_from_url
from hotel_site.utils.image_upload import ImageUploader


def test_signup_and_session(client):
    headers = sign_up(client, GUEST_EMAIL)

    response = client.get("/auth/session", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == GUEST_EMAIL
    assert body["is_admin"] is False


def test_configured_email_becomes_admin(client):
    response = client.post("/auth/signup", json={
        "full_name": "Admin Hotel",
        "email": ADMIN_EMAIL,
        "password": PASSWORD,
        "confirm_password": PASSWORD,
    })
    assert response.json()["is_admin"] is True


def test_session_without_token(client):
    assert client.get("/auth/session").json() == {"user": None, "is_admin": False}


def test_duplicate_email(client):
    sign_up(client, GUEST_EMAIL)
    response = client.post("/auth/signup", json={
        "full_name": "Lain",
        "email": GUEST_EMAIL.upper(),
        "password": PASSWORD,
        "confirm_password": PASSWORD,
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Email sudah terdaftar"


def test_signup_validation(client):
    response = client.post("/auth/signup", json={
        "full_name": "B",
        "email": "budi@hotelgrand.com",
        "password": PASSWORD,
        "confirm_password": "berbeda123",
    })
    assert response.status_code == 422
    assert "Nama minimal 2 karakter" in response.text


def test_login(client):
    sign_up(client, GUEST_EMAIL)

    ok = client.post("/auth/login", json={"email": GUEST_EMAIL, "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"

    bad = client.post("/auth/login", json={"email": GUEST_EMAIL, "password": "salah12345"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Email atau password salah"


def test_invalid_token_redirects_to_sign_in(client):
    response = client.get("/auth/session", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.headers["x-redirect"] == "/auth"


def test_change_password(client):
    headers = sign_up(client, GUEST_EMAIL)

    wrong = client.post("/auth/password", headers=headers, json={
        "current_password": "salah12345", "new_password": "baru12345", "confirm_password": "baru12345",
    })
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Password saat ini salah"

    ok = client.post("/auth/password", headers=headers, json={
        "current_password": PASSWORD, "new_password": "baru12345", "confirm_password": "baru12345",
    })
    assert ok.status_code == 200

    login = client.post("/auth/login", json={"email": GUEST_EMAIL, "password": "baru12345"})
    assert login.status_code == 200


def test_profile(client):
    headers = sign_up(client, GUEST_EMAIL, "Budi Santoso")

    profile = client.get("/profile", headers=headers).json()
    assert profile["full_name"] == "Budi Santoso"
    assert profile["initials"] == "BS"

    updated = client.put("/profile", headers=headers, json={"full_name": "  Siti Aminah "}).json()
    assert updated["full_name"] == "Siti Aminah"
    assert updated["initials"] == "SA"

    assert client.get("/profile").status_code == 401


def test_new_avatar_replaces_the_old_one(client):
    headers = sign_up(client, GUEST_EMAIL)
    deleted = []
    app.dependency_overrides[get_avatar_uploader] = lambda: ImageUploader(
        upload=lambda data, path: f"https://res.cloudinary.com/demo/image/upload/v1/{path}.png",
        delete=lambda path: deleted.append(path) or True,
        max_bytes=2 * 1024 * 1024,
    )

    def upload():
        response = client.post("/profile/avatar", headers=headers, files={"file": ("me.png", png_bytes(), "image/png")})
        assert response.status_code == 200, response.text
        return response.json()["avatar_url"]

    first = upload()
    assert "/avatars/" in first
    assert deleted == []

    second = upload()
    assert second != first
    assert deleted == [path_from_url(first)]
