import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from hotel_site.core.config import CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET
from hotel_site.core.errors import BackendError
from hotel_site.core.logging_config import get_logger

logger = get_logger().bind(log_type="upload")

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET,
)


def upload_image(image_bytes: bytes, path: str) -> str:
    """Upload under `path` (folder/unique-name) and return the public URL."""
    try:
        result = cloudinary.uploader.upload(
            image_bytes,
            public_id=path,
            resource_type="image",
            overwrite=False,
        )
    except CloudinaryError as e:
        logger.error(f"Cloudinary upload error: {path} -> {e}")
        raise BackendError(str(e))

    url = result.get("secure_url")
    if not url:
        raise BackendError("Terjadi kesalahan saat mengupload gambar")
    return url


def delete_image(path: str) -> bool:
    try:
        result = cloudinary.uploader.destroy(path, invalidate=True)
    except CloudinaryError as e:
        logger.error(f"Cloudinary delete error: {path} -> {e}")
        raise BackendError(str(e))
    return result.get("result") == "ok"


def path_from_url(url: str | None) -> str | None:
    """Recover the storage path from a delivery URL (.../upload/v123/<path>.<ext>)."""
    if not url or "/upload/" not in url:
        return None
    tail = url.split("/upload/", 1)[1]
    parts = tail.split("/")
    if parts and parts[0].startswith("v") and parts[0][1:].isdigit():
        parts = parts[1:]
    path = "/".join(parts)
    return path.rsplit(".", 1)[0] if "." in path else path
