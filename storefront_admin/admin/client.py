"""
HTTP client for the admin REST API
"""
import logging
from typing import Any, Dict, List, Optional
import requests
from storefront_admin.config import settings

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Local validation failure; raised before any request is sent"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(Exception):
    """Non-2xx response or transport failure"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ApiError):
    """The requested entity does not exist"""


class AdminApiClient:
    """
    Thin wrapper over the /api/admin endpoints

    session can be any requests.Session-compatible object (tests pass a
    FastAPI TestClient).
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None, session=None, timeout: float = 10):
        self.base_url = (settings.API_BASE_URL if base_url is None else base_url).rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, fallback: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(fallback) from e

        if 200 <= response.status_code < 300:
            if response.status_code == 204 or not response.content:
                return {}
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"{method} {path} returned a non-JSON body")
                raise ApiError(fallback, response.status_code) from e

        message = fallback
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
        except ValueError:
            pass

        logger.warning(f"{method} {path} returned {response.status_code}: {message}")
        if response.status_code == 404:
            raise NotFoundError(message, response.status_code)
        raise ApiError(message, response.status_code)

    # Session

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", "Failed to sign in", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    # Categories

    def list_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/admin/categories", "Failed to fetch categories").get("categories", [])

    def get_category(self, category_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/admin/categories/{category_id}", "Failed to fetch category")["category"]

    def create_category(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/categories", "Failed to create category", json=payload)["category"]

    def update_category(self, category_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/api/admin/categories/{category_id}", "Failed to update category", json=payload
        )["category"]

    def delete_category(self, category_id: str) -> None:
        self._request("DELETE", f"/api/admin/categories/{category_id}", "Failed to delete category")

    # Brands, images, products, dashboard

    def list_brands(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/admin/brands", "Failed to fetch brands").get("brands", [])

    def list_images(self) -> List[str]:
        images = self._request("GET", "/api/admin/images", "Failed to fetch images").get("images")
        return images if isinstance(images, list) else []

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/products", "Failed to create product", json=payload)["product"]

    def get_dashboard(self) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/dashboard", "Failed to fetch dashboard stats").get("stats") or {}
