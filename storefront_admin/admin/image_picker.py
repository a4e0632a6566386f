"""
Image picker: catalog normalisation, folder facets, search and selection

The picker offers images under one root folder. Every subfolder present in
the catalog becomes a facet; facet and search term combine with AND.
"""
import logging
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse
from storefront_admin.admin.client import AdminApiClient, ApiError
from storefront_admin.config import settings
from storefront_admin.utils.images import has_image_extension

logger = logging.getLogger(__name__)

# Separator of the multi-image field value, in both directions
DELIMITER = ", "

# Used when no catalog was supplied and the listing failed or came back empty
FALLBACK_IMAGES = [
    "/products/pic1.png",
    "/products/pic2.png",
    "/products/clothing/dress-style-1.png",
    "/products/towels/pic4.png",
]


def normalize_path(path: str) -> str:
    """
    Canonical site path for an image

    Absolute URLs keep only their path, backslashes become forward slashes
    and the result has exactly one leading slash.
    """
    if not path or not isinstance(path, str):
        return ""
    path = path.strip()
    if path.startswith(("http://", "https://")):
        try:
            path = urlparse(path).path
        except ValueError:
            # Malformed URL: keep the raw string
            logger.debug(f"Could not parse image URL: {path}")
    path = path.replace("\\", "/").strip()
    if not path:
        return ""
    return "/" + path.lstrip("/")


def filter_catalog(paths: List[str], root_folder: str) -> List[str]:
    """Normalised image paths lying at or below root_folder, duplicates dropped"""
    root = normalize_path(root_folder).rstrip("/")
    seen = set()
    result = []
    for raw in paths:
        path = normalize_path(raw)
        if not path or path in seen or not has_image_extension(path):
            continue
        if root and not (path == root or path.startswith(root + "/")):
            continue
        seen.add(path)
        result.append(path)
    return result


def folder_facets(paths: List[str]) -> List[str]:
    """Every ancestor folder of every path, e.g. /products and /products/clothing"""
    folders = set()
    for path in paths:
        parts = [part for part in path.split("/") if part]
        current = ""
        for part in parts[:-1]:
            current += "/" + part
            folders.add(current)
    return sorted(folders)


def facet_count(paths: List[str], facet: str) -> int:
    return sum(1 for path in paths if path.startswith(facet + "/"))


def visible_images(paths: List[str], facet: str = "", search: str = "") -> List[str]:
    """Paths inside facet ('' = all) whose text contains search, case-insensitively"""
    term = (search or "").strip().lower()
    return [
        path for path in paths
        if (not facet or path.startswith(facet + "/"))
        and (not term or term in path.lower())
    ]


def split_value(value: str) -> List[str]:
    if not value:
        return []
    return [item for item in value.split(DELIMITER) if item]


def join_value(images: List[str]) -> str:
    return DELIMITER.join(images)


class ImagePicker:
    """
    Selection state of one image field

    Single mode holds one path; multiple mode holds a DELIMITER-joined list.
    """

    def __init__(
        self,
        value: str = "",
        multiple: bool = False,
        root_folder: Optional[str] = None,
        available_images: Optional[List[str]] = None,
        client: Optional[AdminApiClient] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.value = value or ""
        self.multiple = multiple
        self.root_folder = root_folder or settings.IMAGE_ROOT_FOLDER
        self.available_images = list(available_images or [])
        self.client = client
        self.on_change = on_change
        self.fetched_images: List[str] = []
        self.is_open = False
        self.loading = False
        self.selected_folder = ""
        self.search_term = ""

    def open(self):
        """Show the picker; fetches the catalog when none was supplied"""
        self.is_open = True
        self.selected_folder = ""
        if self.available_images or self.fetched_images or self.client is None:
            return

        self.loading = True
        try:
            images = self.client.list_images()
        except ApiError as e:
            logger.warning(f"Image listing failed, using fallback catalog: {e.message}")
        else:
            if images:
                self.fetched_images = list(images)
        finally:
            self.loading = False

    def close(self):
        self.is_open = False

    @property
    def raw_catalog(self) -> List[str]:
        return self.available_images or self.fetched_images or FALLBACK_IMAGES

    @property
    def catalog(self) -> List[str]:
        raw = self.raw_catalog
        images = filter_catalog(raw, self.root_folder)
        logger.debug(
            f"Image catalog: supplied={len(self.available_images)} fetched={len(self.fetched_images)} "
            f"using={len(raw)} kept={len(images)} under {self.root_folder}"
        )
        return images

    @property
    def folders(self) -> List[str]:
        folders = folder_facets(self.catalog)
        logger.debug(f"Image folders: {folders}")
        return folders

    def folder_counts(self) -> List[Tuple[str, int]]:
        """('' = all) followed by each facet, with the number of images it holds"""
        images = self.catalog
        return [("", len(images))] + [(folder, facet_count(images, folder)) for folder in folder_facets(images)]

    def select_folder(self, folder: str):
        self.selected_folder = folder or ""

    def search(self, term: str):
        self.search_term = term or ""

    @property
    def visible(self) -> List[str]:
        images = self.catalog
        result = visible_images(images, self.selected_folder, self.search_term)
        logger.debug(f"Showing {len(result)} of {len(images)} images in {self.selected_folder or 'All'}")
        return result

    @property
    def selected(self) -> List[str]:
        if self.multiple:
            return split_value(self.value)
        return [self.value] if self.value else []

    def _set_value(self, value: str):
        self.value = value
        if self.on_change is not None:
            self.on_change(value)

    def select(self, path: str):
        """Single mode replaces the value and closes; multiple mode appends and stays open"""
        logger.debug(f"Image selected: {path}")
        if self.multiple:
            current = split_value(self.value)
            if path not in current:
                self._set_value(join_value(current + [path]))
        else:
            self._set_value(path)
            self.close()

    def remove(self, path: str):
        """Drop one matching entry (multiple mode) or clear the value (single mode)"""
        if self.multiple:
            current = split_value(self.value)
            if path in current:
                current.remove(path)
                self._set_value(join_value(current))
        else:
            self._set_value("")
