"""Email/password accounts, profile and password reset."""
import logging
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import UserAccount
from app.exceptions import ValidationError, AuthenticationError, PersistenceError
from app.utils.db import transactional
from app.utils.jwt import (
    create_access_token,
    create_refresh_token,
    create_reset_token,
    decode_token,
    TokenError,
)

logger = logging.getLogger(__name__)


def issue_tokens(user: UserAccount) -> dict:
    return {
        "access_token": create_access_token(user.id, user.role or "customer"),
        "refresh_token": create_refresh_token(user.id),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }


def find_by_email(email: str) -> Optional[UserAccount]:
    return UserAccount.query.filter_by(email=email.strip().lower()).first()


def sign_up(email: str, password: str, name: str = None, phone: str = None) -> UserAccount:
    if find_by_email(email):
        raise ValidationError("An account with this email already exists")
    user = UserAccount(email=email, name=name, phone=phone, role="customer")
    user.set_password(password)
    try:
        with transactional("Failed to create account"):
            db.session.add(user)
    except PersistenceError as e:
        if not isinstance(e.__cause__, IntegrityError):
            raise
        raise ValidationError("An account with this email already exists")
    logger.info("Account %s created", user.id)
    return user


def sign_in(email: str, password: str) -> UserAccount:
    user = find_by_email(email)
    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid email or password")
    return user


def refresh(refresh_token: str) -> dict:
    try:
        payload = decode_token(refresh_token, expected_type="refresh")
    except TokenError as e:
        raise AuthenticationError(str(e))
    user = db.session.get(UserAccount, int(payload["sub"]))
    if not user:
        raise AuthenticationError("Account not found")
    return issue_tokens(user)


def reset_link(user: UserAccount) -> str:
    token = create_reset_token(user.id, user.password_hash)
    base = current_app.config.get("FRONTEND_URL", "").rstrip("/")
    return f"{base}/reset-password?token={token}"


def request_password_reset(email: str) -> Optional[str]:
    """Queue a reset email when the account exists. Returns the link or None."""
    user = find_by_email(email)
    if not user:
        logger.info("Password reset requested for unknown account")
        return None

    from app.tasks.notifications import send_password_reset_task

    link = reset_link(user)
    if current_app.config.get("TESTING"):
        send_password_reset_task(user.email, link)
    else:
        send_password_reset_task.delay(user.email, link)
    return link


def user_from_reset_token(token: str) -> UserAccount:
    try:
        payload = decode_token(token, expected_type="reset")
    except TokenError as e:
        raise AuthenticationError(str(e))
    user = db.session.get(UserAccount, int(payload["sub"]))
    # The token is bound to the password it was issued for
    if not user or user.password_hash[-12:] != payload.get("pwd"):
        raise AuthenticationError("Reset link is no longer valid")
    return user


def update_password(user: UserAccount, new_password: str) -> UserAccount:
    user.set_password(new_password)
    with transactional("Failed to update password"):
        db.session.add(user)
    logger.info("Password updated for account %s", user.id)
    return user


def update_profile(user: UserAccount, changes: dict) -> UserAccount:
    with transactional("Failed to update profile"):
        for key, value in changes.items():
            setattr(user, key, value)
    return user


def create_admin(email: str, password: str) -> UserAccount:
    """Create an admin account or promote an existing one."""
    user = find_by_email(email)
    if user is None:
        user = UserAccount(email=email.strip().lower())
        db.session.add(user)
    user.role = "admin"
    user.set_password(password)
    with transactional("Failed to create admin"):
        pass
    return user
