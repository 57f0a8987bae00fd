"""
User service for registration, login and provisional users.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from splitrip.core.config import Settings
from splitrip.core.exceptions import DuplicateError, Unauthorized, ValidationError
from splitrip.core.security import get_password_hash, verify_password
from splitrip.db.session import transaction
from splitrip.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_user(
    email: str,
    password: str,
    settings: Settings,
    db: Session,
    name: str = None
) -> User:
    """
    Register a new user.

    An email that belongs to a provisional user (created by a participant
    invite) is claimed: the password is replaced and the account stops being
    provisional.
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters")

    email = normalize_email(email)
    hashed_password = get_password_hash(password, rounds=settings.BCRYPT_ROUNDS)

    try:
        with transaction(db):
            user = get_user_by_email(email, db)
            if user and not user.is_provisional:
                raise DuplicateError("Email already registered")
            if user:
                user.hashed_password = hashed_password
                user.is_provisional = False
                if name:
                    user.name = name
                logger.info(f"Provisional user {user.id} claimed by registration")
            else:
                user = User(email=email, name=name, hashed_password=hashed_password)
                db.add(user)
    except IntegrityError as e:
        raise DuplicateError("Email already registered") from e

    db.refresh(user)
    return user


def authenticate(email: str, password: str, db: Session) -> User:
    """Check credentials and return the user."""
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        raise Unauthorized("Incorrect email or password")
    if not user.is_active:
        raise Unauthorized("User account is inactive")
    return user


def provision_user(email: str, settings: Settings, db: Session) -> User:
    """
    Create a placeholder account for an invited email.

    Adds the user to the session without committing; the caller's
    transaction decides whether it is kept.
    """
    user = User(
        email=normalize_email(email),
        hashed_password=get_password_hash(settings.PROVISIONAL_PASSWORD, rounds=settings.BCRYPT_ROUNDS),
        is_provisional=True
    )
    db.add(user)
    db.flush()
    logger.info(f"Provisioned user {user.id} for invited email")
    return user
