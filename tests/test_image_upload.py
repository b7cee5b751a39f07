import pytest
from PIL import Image

from conftest import png_bytes
from hotel_site.core.config import MAX_UPLOAD_BYTES
from hotel_site.core.errors import BackendError, UploadRejected
from hotel_site.utils.cloudinary_utils import path_from_url
from hotel_site.utils.image_upload import ImageFile, ImageUploader, move_image, remove_image, unique_path


class FakeStorage:
    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.uploaded = []

    def upload(self, data: bytes, path: str) -> str:
        if data in self.fail_for:
            raise BackendError("storage unavailable")
        self.uploaded.append(path)
        return f"https://cdn.example.com/{path}.png"


def image(name, data=None, content_type="image/png"):
    return ImageFile(filename=name, content_type=content_type, data=data if data is not None else png_bytes())


def test_unique_path_layout():
    path = unique_path("rooms")
    folder, stem = path.split("/")
    assert folder == "rooms"
    millis, token = stem.split("-")
    assert millis.isdigit()
    assert len(token) == 10


def test_checks_reject_before_upload():
    uploader = ImageUploader(upload=FakeStorage().upload)

    with pytest.raises(UploadRejected, match="notes.pdf bukan file gambar"):
        uploader.check(image("notes.pdf", b"%PDF", content_type="application/pdf"))

    with pytest.raises(UploadRejected, match="fake.png bukan file gambar"):
        uploader.check(image("fake.png", b"definitely not a png"))

    uploader.check(image("logo.svg", b"<svg/>", content_type="image/svg+xml"))


async def test_oversize_file_in_the_middle_of_a_batch():
    storage = FakeStorage()
    uploader = ImageUploader(upload=storage.upload)
    files = [
        image("a.png"),
        image("big.png", b"\0" * (MAX_UPLOAD_BYTES + 1)),
        image("c.png"),
    ]

    batch = await uploader.upload_many(files, "rooms", remaining=10)

    assert len(batch.urls) == 2
    assert all(url.startswith("https://cdn.example.com/rooms/") for url in batch.urls)
    assert [n.message for n in batch.rejected] == ["big.png melebihi 5MB"]


async def test_batch_is_truncated_to_free_slots():
    storage = FakeStorage()
    uploader = ImageUploader(upload=storage.upload)

    batch = await uploader.upload_many([image("a.png"), image("b.png"), image("c.png")], "rooms", remaining=2)

    assert len(batch.urls) == 2
    assert batch.rejected == []


async def test_full_gallery_rejects_everything():
    storage = FakeStorage()
    uploader = ImageUploader(upload=storage.upload)

    batch = await uploader.upload_many([image("a.png")], "rooms", remaining=0)

    assert batch.urls == []
    assert batch.rejected[0].message == "Maksimal 10 gambar"
    assert storage.uploaded == []


async def test_storage_failure_keeps_earlier_urls():
    bad = png_bytes((6, 6))
    storage = FakeStorage(fail_for=[bad])
    uploader = ImageUploader(upload=storage.upload)

    batch = await uploader.upload_many([image("a.png"), image("b.png", bad), image("c.png")], "rooms", remaining=5)

    assert len(batch.urls) == 2
    assert batch.rejected[0].title == "Gagal upload"
    assert "b.png" in batch.rejected[0].message


async def test_pixel_bomb_in_the_middle_of_a_batch(monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    storage = FakeStorage()
    uploader = ImageUploader(upload=storage.upload)
    files = [image("a.png"), image("huge.png", png_bytes((100, 100))), image("c.png")]

    batch = await uploader.upload_many(files, "rooms", remaining=10)

    assert len(batch.urls) == 2
    assert len(storage.uploaded) == 2
    assert [n.message for n in batch.rejected] == ["huge.png resolusinya terlalu besar"]


async def test_free_slots_never_exceed_the_gallery_maximum():
    storage = FakeStorage()
    uploader = ImageUploader(upload=storage.upload)
    files = [image(f"{i}.png") for i in range(12)]

    batch = await uploader.upload_many(files, "rooms", remaining=50)

    assert len(batch.urls) == 10
    assert len(storage.uploaded) == 10


async def test_delete_goes_through_storage():
    deleted = []
    uploader = ImageUploader(upload=FakeStorage().upload, delete=lambda path: deleted.append(path) or True)

    assert await uploader.delete("rooms/123-abc") is True
    assert deleted == ["rooms/123-abc"]


def test_gallery_reordering():
    images = ["a", "b", "c"]
    assert move_image(images, 0, 2) == ["b", "c", "a"]
    assert move_image(images, 0, 5) == ["a", "b", "c"]
    assert remove_image(images, 1) == ["a", "c"]
    assert images == ["a", "b", "c"]


def test_path_from_url():
    url = "https://res.cloudinary.com/demo/image/upload/v1712345678/avatars/u1/1712-abc.jpg"
    assert path_from_url(url) == "avatars/u1/1712-abc"
    assert path_from_url("https://elsewhere.com/a.png") is None
    assert path_from_url(None) is None
