"""
Session Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from datetime import datetime
from storefront_admin.database import get_db
from storefront_admin.schemas.auth import LoginRequest, LoginResponse, SessionUser
from storefront_admin.models.user import User
from storefront_admin.utils.security import verify_password, create_access_token
from storefront_admin.api.admin_deps import get_current_user
from storefront_admin.utils.admin_activity import log_admin_activity

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """Exchange email and password for a bearer token"""
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    user.last_login = datetime.utcnow()
    db.commit()

    token = create_access_token({"sub": user.id, "email": user.email, "isAdmin": user.is_admin})

    if user.is_admin:
        log_admin_activity(db=db, user_id=user.id, action="admin_login", request=request)

    return LoginResponse(token=token, user=SessionUser.from_user(user))


@router.get("/me", response_model=SessionUser)
async def get_me(user: User = Depends(get_current_user)):
    """Current session user"""
    return SessionUser.from_user(user)
