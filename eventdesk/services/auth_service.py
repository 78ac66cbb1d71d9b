"""
Authentication service handling user registration, login and user admin.
Passwords are compared in plaintext; the record format stores them that way.
"""

from typing import Optional

from eventdesk.core.config import Settings
from eventdesk.core.errors import AuthError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_login
from eventdesk.models import Role, User
from eventdesk.schemas.user import UserCreate, UserLogin
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)


def register_user(store: EntityStore, user_data: UserCreate) -> User:
    """
    Register a new user. The id comes from the shared user/attendee
    high-water mark so it can later double as the user's attendee id.
    Raises ValidationError if the username already exists (case-sensitive).
    """
    if store.find_user_by_username(user_data.username):
        logger.warning("registration_failed", reason="username_exists", username=user_data.username)
        raise ValidationError("Username already exists")

    user = store.users.insert(
        User(
            username=user_data.username,
            password=user_data.password,
            role=user_data.role,
            id=store.next_person_id(),
        )
    )
    logger.info("user_registered", user_id=user.id, username=user.username, role=user.role.name)
    return user


def authenticate_user(store: EntityStore, login_data: UserLogin) -> User:
    """
    Check credentials and return the matching user.
    Raises AuthError without saying which half was wrong.
    """
    user = store.find_user_by_username(login_data.username)

    if not user or user.password != login_data.password:
        record_login(False)
        logger.warning("login_failed", username=login_data.username)
        raise AuthError("Invalid username or password")

    record_login(True)
    logger.info("user_logged_in", user_id=user.id)
    return user


def ensure_session(store: EntityStore, user: User) -> User:
    """Re-resolve the session account; raises AuthError if it no longer exists."""
    current = store.users.find_by_id(user.id)
    if current is None or current.username != user.username:
        raise AuthError("Your session is no longer valid, please log in again")
    return current


def list_users(store: EntityStore) -> list[User]:
    return store.users.all()


def delete_user(store: EntityStore, user_id: int, session_user: User) -> User:
    """Delete another account. The session's own account is refused."""
    user = store.delete_user(user_id, session_user_id=session_user.id)
    logger.info("user_deleted", user_id=user.id, username=user.username, by=session_user.id)
    return user


def seed_default_admin(store: EntityStore, settings: Settings) -> Optional[User]:
    """Create the default admin account when the user store is empty."""
    if len(store.users) or not settings.SEED_DEFAULT_ADMIN:
        return None
    admin = store.users.insert(
        User(
            username=settings.DEFAULT_ADMIN_USERNAME,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            role=Role.ADMIN,
            id=store.next_person_id(),
        )
    )
    logger.info("default_admin_created", user_id=admin.id, username=admin.username)
    return admin
