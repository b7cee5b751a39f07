import re

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from hotel_site.core.dependencies import get_uploader, require_admin
from hotel_site.core.errors import BackendError, UploadRejected
from hotel_site.utils.image_upload import ImageFile, ImageUploader

router = APIRouter(prefix="/uploads", tags=["Uploads"], dependencies=[Depends(require_admin)])

FOLDER_PATTERN = re.compile(r"^[a-z0-9_-]+$")


def check_folder(folder: str) -> str:
    if not FOLDER_PATTERN.match(folder):
        raise HTTPException(status_code=400, detail="Folder tidak valid")
    return folder


async def read_image(upload_file: UploadFile) -> ImageFile:
    return ImageFile(
        filename=upload_file.filename or "file",
        content_type=upload_file.content_type or "",
        data=await upload_file.read(),
    )


# =====================================================================
#                       SINGLE IMAGE
# =====================================================================
@router.post("/{folder}")
async def upload_one(
    folder: str,
    file: UploadFile = File(...),
    uploader: ImageUploader = Depends(get_uploader)
):
    check_folder(folder)

    try:
        url = await uploader.upload(await read_image(file), folder)
    except (UploadRejected, BackendError) as e:
        raise HTTPException(status_code=400, detail=e.message)

    return {"url": url, "message": "Gambar berhasil diupload"}


# =====================================================================
#                       GALLERY BATCH
# =====================================================================
@router.post("/{folder}/batch")
async def upload_batch(
    folder: str,
    files: list[UploadFile] = File(...),
    remaining: int = Form(...),
    uploader: ImageUploader = Depends(get_uploader)
):
    check_folder(folder)

    images = [await read_image(f) for f in files]
    batch = await uploader.upload_many(images, folder, remaining)

    return {
        "urls": batch.urls,
        "rejected": [{"title": n.title, "message": n.message} for n in batch.rejected],
    }


# =====================================================================
#                       DELETE BY PATH
# =====================================================================
@router.delete("")
async def delete_upload(path: str, uploader: ImageUploader = Depends(get_uploader)):
    try:
        deleted = await uploader.delete(path)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if not deleted:
        raise HTTPException(status_code=404, detail="Gambar tidak ditemukan")
    return {"message": "Gambar berhasil dihapus"}
