"""
User service: registration and onboarding flag.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import EmailAlreadyExistsError, UserNotFoundError
from app.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def register_user(db: Session, email: str) -> User:
    """Create a user. Emails are unique case-insensitively (stored lower-case)."""
    email = email.strip().lower()
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise EmailAlreadyExistsError(email)

    user = User(email=email, completed_onboarding=False)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        raise EmailAlreadyExistsError(email)
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def complete_onboarding(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    if not user.completed_onboarding:
        user.completed_onboarding = True
        db.commit()
        db.refresh(user)
    return user
