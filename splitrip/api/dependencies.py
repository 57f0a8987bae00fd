"""
Shared FastAPI dependencies: settings, database session, rate client, identity.
"""
from typing import Iterator, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from splitrip.core.config import Settings
from splitrip.core.exceptions import Unauthorized
from splitrip.core.security import decode_access_token
from splitrip.models.user import User
from splitrip.services.fx_service import ExchangeRateClient

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_rate_client(request: Request) -> ExchangeRateClient:
    return request.app.state.rate_client


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Token not provided")

    user_id = decode_access_token(credentials.credentials, settings)
    if user_id is None:
        raise Unauthorized("Invalid or expired token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise Unauthorized("Invalid or expired token")
    return user
