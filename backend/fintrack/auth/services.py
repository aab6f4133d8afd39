# backend/fintrack/auth/services.py

import logging

from werkzeug.security import generate_password_hash, check_password_hash

from fintrack.storage import get_storage

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to FinTrack! Start by adding your first transaction."


def register_user(data):

    storage = get_storage()

    if storage.get_user_by_username(data.username):
        return None, "Username already taken"

    if storage.get_user_by_email(data.email):
        return None, "Email already registered"

    user = storage.create_user(
        {
            "username": data.username,
            "name": data.name,
            "email": data.email,
            "password": generate_password_hash(data.password),
        }
    )

    storage.create_notification({"user_id": user.id, "message": WELCOME_MESSAGE, "read": False})
    logger.info("Registered user %s (id=%s)", user.username, user.id)

    return user, None


def login_user(data):

    user = get_storage().get_user_by_username(data.username)

    if not user:
        logger.info("Login failed for unknown user %r", data.username)
        return None, "Invalid username or password"

    if not check_password_hash(user.password, data.password):
        logger.info("Login failed for user id=%s", user.id)
        return None, "Invalid username or password"

    return user, None
