"""
Admin Image Catalog Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Request
from sqlalchemy.orm import Session
from typing import Optional
from pathlib import Path
import logging
import re
import uuid
from storefront_admin.database import get_db
from storefront_admin.api.admin_deps import require_admin
from storefront_admin.utils.admin_activity import log_admin_activity
from storefront_admin.utils.images import IMAGE_EXTENSIONS, list_public_images
from storefront_admin.config import settings
from storefront_admin.models.user import User

router = APIRouter()
logger = logging.getLogger(__name__)

SAFE_FOLDER = re.compile(r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$")


def validate_image_file(file: UploadFile) -> str:
    """Validate the upload and return its lowercase extension (with dot)"""
    file_ext = Path(file.filename).suffix.lower() if file.filename else ''

    if file_ext.lstrip('.') not in IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Allowed: {', '.join(IMAGE_EXTENSIONS)}"
        )

    return file_ext


def save_uploaded_file(file: UploadFile, folder: Optional[str] = None) -> str:
    """Save an uploaded image below the image root folder and return its site path"""
    file_ext = validate_image_file(file)

    folder = (folder or "").strip().strip("/")
    if folder and not SAFE_FOLDER.match(folder):
        raise HTTPException(status_code=400, detail="Invalid folder name")

    content = file.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE / 1024 / 1024}MB"
        )

    relative_dir = settings.IMAGE_ROOT_FOLDER.strip("/")
    if folder:
        relative_dir = f"{relative_dir}/{folder}"

    upload_dir = Path(settings.PUBLIC_DIR) / relative_dir
    upload_dir.mkdir(parents=True, exist_ok=True)

    unique_filename = f"{uuid.uuid4()}{file_ext}"
    with open(upload_dir / unique_filename, 'wb') as f:
        f.write(content)

    return f"/{relative_dir}/{unique_filename}"


@router.get("")
async def list_images():
    """Flat catalog of image paths under the public folder"""
    return {"images": list_public_images(settings.PUBLIC_DIR)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_image(
    request: Request,
    file: UploadFile = File(...),
    folder: Optional[str] = Form(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Upload an image into the image root folder

    folder: optional subfolder below the root (e.g. 'clothing'); it becomes a
    folder facet in the image picker
    """
    path = save_uploaded_file(file, folder)

    log_admin_activity(
        db=db,
        user_id=admin.id,
        action="image_uploaded",
        entity_type="image",
        details={"filename": file.filename, "path": path},
        request=request
    )

    return {"path": path}
