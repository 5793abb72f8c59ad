"""
Upload API

Image uploads for the admin editor. Files land in the public uploads
directory under a random name; the returned URL is what blogs and
projects reference as coverImage / galleryImages.
"""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from apps.shared.auth import require_admin
from apps.shared.uploads import remove_uploaded_files, save_image_upload

logger = logging.getLogger(__name__)

MAX_FILES = 10

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("/single")
async def upload_single(
    image: UploadFile = File(...),
    admin=Depends(require_admin),
):
    """Upload one image (form field `image`)."""
    url = await save_image_upload(image)
    return {
        "success": True,
        "message": "Image uploaded",
        "imageUrl": url,
    }


@router.post("/multiple")
async def upload_multiple(
    images: list[UploadFile] = File(...),
    admin=Depends(require_admin),
):
    """Upload up to ten images (form field `images`)."""
    if not images:
        raise HTTPException(status_code=400, detail="No images uploaded")
    if len(images) > MAX_FILES:
        raise HTTPException(status_code=400, detail=f"At most {MAX_FILES} images per request")
    # Reject the batch before writing anything
    if any(not (image.content_type or "").startswith("image/") for image in images):
        raise HTTPException(status_code=400, detail="Only image files can be uploaded")

    urls = []
    try:
        for image in images:
            urls.append(await save_image_upload(image))
    except Exception:
        # A later file failed; drop the ones already written
        remove_uploaded_files(urls)
        raise

    return {
        "success": True,
        "message": "Images uploaded",
        "imageUrls": urls,
    }
