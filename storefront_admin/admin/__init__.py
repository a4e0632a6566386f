"""
Back-office page controllers

Python counterparts of the admin screens: each controller drives one page
against the admin REST API through AdminApiClient and exposes the state the
page renders (form fields, error banner, redirect target).
"""
from storefront_admin.admin.client import AdminApiClient, ApiError, NotFoundError, ValidationError

__all__ = ["AdminApiClient", "ApiError", "NotFoundError", "ValidationError"]
