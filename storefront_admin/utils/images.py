"""
Static image catalog helpers
"""
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "webp", "svg")


def has_image_extension(path: str) -> bool:
    """Case-insensitive check against IMAGE_EXTENSIONS"""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return False
    return name.rsplit(".", 1)[-1].lower() in IMAGE_EXTENSIONS


def list_public_images(public_dir: str) -> List[str]:
    """
    List every image file below public_dir as a site-rooted path

    e.g. <public_dir>/products/clothing/dress.png -> /products/clothing/dress.png
    """
    root = Path(public_dir)
    if not root.is_dir():
        logger.warning(f"Public image directory does not exist: {root}")
        return []

    images = []
    for file_path in root.rglob("*"):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(root).as_posix()
        if has_image_extension(relative):
            images.append("/" + relative)

    images.sort()
    logger.debug(f"Found {len(images)} images under {root}")
    return images
