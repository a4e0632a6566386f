"""
Admin Activity Logging Utility
"""
import logging
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
from fastapi import Request
from storefront_admin.models.admin_activity_log import AdminActivityLog

logger = logging.getLogger(__name__)


def log_admin_activity(
    db: Session,
    user_id: Optional[str],
    action: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None
):
    """
    Log admin activity to the database

    Args:
        db: Database session
        user_id: ID of the admin performing the action
        action: Action name (e.g., 'category_created', 'image_uploaded')
        entity_type: Type of entity (e.g., 'category', 'product', 'brand')
        entity_id: ID of the entity being acted upon
        details: Additional details as JSON
        request: FastAPI request object to extract IP and user agent
    """
    ip_address = None
    user_agent = None

    if request:
        if request.client:
            ip_address = request.client.host
        user_agent = request.headers.get("user-agent")

    activity_log = AdminActivityLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        ip_address=ip_address,
        user_agent=user_agent
    )

    db.add(activity_log)
    db.commit()
    logger.info(f"Admin {user_id} {action} {entity_type or ''} {entity_id or ''}".rstrip())
    return activity_log
