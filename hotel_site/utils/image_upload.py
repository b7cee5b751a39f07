"""
Image upload helper used by the admin forms.

Files are checked (image MIME type, size ceiling, decodable by Pillow) before
anything is sent to storage. In a batch a rejected or failed file only
produces a notice; the other files still go through.
"""
import asyncio
import io
import secrets
import time
from dataclasses import dataclass, field

from PIL import Image, UnidentifiedImageError

from hotel_site.core import notices
from hotel_site.core.config import BACKEND_TIMEOUT_SECONDS, MAX_GALLERY_IMAGES, MAX_UPLOAD_BYTES
from hotel_site.core.errors import BackendError, BackendTimeout, UploadRejected
from hotel_site.core.logging_config import get_logger
from hotel_site.utils import cloudinary_utils

logger = get_logger().bind(log_type="upload")

# Pillow cannot rasterize these; the MIME check is all they get
_UNVERIFIABLE_TYPES = {"image/svg+xml"}


@dataclass
class ImageFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class UploadBatch:
    urls: list = field(default_factory=list)
    rejected: list = field(default_factory=list)


def unique_path(folder: str) -> str:
    stem = f"{int(time.time() * 1000)}-{secrets.token_hex(5)}"
    return f"{folder.strip('/')}/{stem}"


# ---------- gallery editing (local only, saved with the form) ----------
def move_image(images: list, from_index: int, to_index: int) -> list:
    if not (0 <= from_index < len(images)) or not (0 <= to_index < len(images)):
        return list(images)
    moved = list(images)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def remove_image(images: list, index: int) -> list:
    return [url for i, url in enumerate(images) if i != index]


class ImageUploader:
    def __init__(self, upload=None, delete=None, max_bytes: int = MAX_UPLOAD_BYTES,
                 max_images: int = MAX_GALLERY_IMAGES, timeout: float = BACKEND_TIMEOUT_SECONDS):
        self._upload = upload or cloudinary_utils.upload_image
        self._delete = delete or cloudinary_utils.delete_image
        self.max_bytes = max_bytes
        self.max_images = max_images
        self.timeout = timeout

    # =====================================================================
    #                           LOCAL CHECKS
    # =====================================================================
    def check(self, file: ImageFile):
        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise UploadRejected(file.filename, f"{file.filename} bukan file gambar")

        if file.size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise UploadRejected(file.filename, f"{file.filename} melebihi {limit_mb:g}MB")

        if content_type in _UNVERIFIABLE_TYPES:
            return

        try:
            Image.open(io.BytesIO(file.data)).verify()
        except Image.DecompressionBombError:
            raise UploadRejected(file.filename, f"{file.filename} resolusinya terlalu besar")
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            raise UploadRejected(file.filename, f"{file.filename} bukan file gambar")

    # =====================================================================
    #                           UPLOADS
    # =====================================================================
    async def _call(self, fn, *args):
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(loop.run_in_executor(None, fn, *args), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise BackendTimeout(self.timeout)

    async def upload(self, file: ImageFile, folder: str) -> str:
        self.check(file)

        path = unique_path(folder)
        url = await self._call(self._upload, file.data, path)

        logger.info(f"UPLOAD: {file.filename} -> {path}")
        return url

    async def delete(self, path: str) -> bool:
        deleted = await self._call(self._delete, path)
        logger.info(f"DELETE: {path} ({'ok' if deleted else 'not found'})")
        return deleted

    async def upload_many(self, files: list, folder: str, remaining: int) -> UploadBatch:
        batch = UploadBatch()
        remaining = min(remaining, self.max_images)

        if remaining <= 0:
            batch.rejected.append(notices.error(f"Maksimal {self.max_images} gambar"))
            return batch

        # Extra files beyond the free slots are dropped
        for file in files[:remaining]:
            try:
                batch.urls.append(await self.upload(file, folder))
            except UploadRejected as e:
                logger.warning(f"REJECTED: {e.filename} ({e.message})")
                batch.rejected.append(notices.error(e.message))
            except BackendError as e:
                logger.error(f"UPLOAD FAILED: {file.filename} -> {e.message}")
                batch.rejected.append(notices.error(f"{file.filename}: {e.message}", title="Gagal upload"))

        if batch.urls:
            logger.info(f"BATCH: {len(batch.urls)} uploaded to {folder}, {len(batch.rejected)} rejected")
        return batch
