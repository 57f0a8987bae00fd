"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from splitrip.api.dependencies import get_db, get_settings
from splitrip.core.config import Settings
from splitrip.core.security import create_access_token
from splitrip.schemas.user import UserCreate, UserLogin, Token, UserResponse
from splitrip.services.user_service import register_user, authenticate

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Register a new user and return an access token."""
    user = register_user(user_data.email, user_data.password, settings, db, name=user_data.name)
    return Token(
        access_token=create_access_token(user.id, settings),
        user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Login and get JWT token."""
    user = authenticate(credentials.email, credentials.password, db)
    return Token(
        access_token=create_access_token(user.id, settings),
        user=UserResponse.model_validate(user)
    )
