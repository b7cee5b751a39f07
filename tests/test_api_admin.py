from conftest import png_bytes
from hotel_site.core.dependencies import get_uploader
from hotel_site.main import app
from hotel_site.utils.image_upload import ImageUploader


def create_room(client, headers, **overrides):
    body = {"name": "Deluxe", "price": "500000", "sort_order": "1", **overrides}
    response = client.post("/admin/rooms/", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_admin_routes_need_a_session(client):
    response = client.get("/admin/rooms/")
    assert response.status_code == 401
    assert response.headers["x-redirect"] == "/auth"


def test_admin_routes_refuse_guests(client, guest_headers):
    response = client.get("/admin/dashboard", headers=guest_headers)
    assert response.status_code == 403
    assert response.headers["x-redirect"] == "/auth"


def test_create_list_update_delete(client, admin_headers):
    room = create_room(client, admin_headers, features=["AC", "TV"])
    assert room["features"] == ["AC", "TV"]
    assert room["is_active"] is True

    listed = client.get("/admin/rooms/", headers=admin_headers).json()
    assert [r["id"] for r in listed] == [room["id"]]

    updated = client.put(f"/admin/rooms/{room['id']}", headers=admin_headers, json={"is_active": False})
    assert updated.status_code == 200
    assert updated.json()["is_active"] is False
    assert updated.json()["name"] == "Deluxe"

    refused = client.delete(f"/admin/rooms/{room['id']}", headers=admin_headers)
    assert refused.status_code == 400

    deleted = client.delete(f"/admin/rooms/{room['id']}?confirm=true", headers=admin_headers)
    assert deleted.json()["message"] == "Kamar berhasil dihapus"
    assert client.get("/admin/rooms/", headers=admin_headers).json() == []


def test_blank_price_is_a_field_error(client, admin_headers):
    response = client.post("/admin/rooms/", headers=admin_headers, json={"name": "Deluxe", "price": ""})
    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == {"price": "Harga per Malam wajib diisi"}
    assert client.get("/admin/rooms/", headers=admin_headers).json() == []


def test_unknown_record(client, admin_headers):
    assert client.put("/admin/services/missing", headers=admin_headers, json={"title": "x"}).status_code == 404
    assert client.delete("/admin/services/missing?confirm=true", headers=admin_headers).status_code == 404


def test_reviews_are_listed_newest_first(client, admin_headers):
    for name in ("Ani", "Budi"):
        client.post("/admin/reviews/", headers=admin_headers, json={"guest_name": name, "rating": "5"})

    listed = client.get("/admin/reviews/", headers=admin_headers).json()
    assert [r["guest_name"] for r in listed] == ["Budi", "Ani"]


def test_dashboard_counts(client, admin_headers):
    create_room(client, admin_headers)
    client.post("/admin/services/", headers=admin_headers, json={"title": "Laundry"})

    counts = client.get("/admin/dashboard", headers=admin_headers).json()
    assert counts == {"rooms": 1, "facilities": 0, "services": 1, "reviews": 0}


def test_settings_save(client, admin_headers):
    response = client.put("/admin/settings", headers=admin_headers, json={"whatsapp": "+6281111"})
    assert response.status_code == 200

    public = client.get("/site/settings").json()
    assert public["whatsapp"] == "+6281111"
    assert public["hotel_name"] == "Hotel Grand Master Purwodadi"


def test_upload_batch(client, admin_headers):
    stored = []

    def fake_upload(data, path):
        stored.append(path)
        return f"https://cdn.example.com/{path}.png"

    app.dependency_overrides[get_uploader] = lambda: ImageUploader(upload=fake_upload)

    response = client.post(
        "/uploads/rooms/batch",
        headers=admin_headers,
        data={"remaining": "1"},
        files=[
            ("files", ("a.png", png_bytes(), "image/png")),
            ("files", ("b.png", png_bytes(), "image/png")),
        ],
    )

    assert response.status_code == 200
    assert len(response.json()["urls"]) == 1
    assert stored[0].startswith("rooms/")


def test_upload_rejects_non_images(client, admin_headers):
    app.dependency_overrides[get_uploader] = lambda: ImageUploader(upload=lambda data, path: "unused")

    response = client.post(
        "/uploads/rooms",
        headers=admin_headers,
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "notes.txt bukan file gambar"


def test_upload_batch_ignores_inflated_free_slots(client, admin_headers):
    app.dependency_overrides[get_uploader] = lambda: ImageUploader(
        upload=lambda data, path: f"https://cdn.example.com/{path}.png"
    )

    response = client.post(
        "/uploads/rooms/batch",
        headers=admin_headers,
        data={"remaining": "50"},
        files=[("files", (f"{i}.png", png_bytes(), "image/png")) for i in range(12)],
    )

    assert response.status_code == 200
    assert len(response.json()["urls"]) == 10


def test_gallery_longer_than_the_maximum_is_refused(client, admin_headers):
    images = [f"https://cdn.example.com/rooms/{i}.png" for i in range(15)]
    response = client.post(
        "/admin/rooms/", headers=admin_headers, json={"name": "Deluxe", "price": "500000", "images": images}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == {"images": "Maksimal 10 gambar"}
    assert client.get("/admin/rooms/", headers=admin_headers).json() == []


def test_single_feature_string_is_kept_whole(client, admin_headers):
    room = create_room(client, admin_headers, features="AC")
    assert room["features"] == ["AC"]
