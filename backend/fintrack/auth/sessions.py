"""
Login sessions.

A session is a JWT access token kept in an HTTP-only cookie. Tokens expire
after JWT_ACCESS_TOKEN_EXPIRES; logging out puts the token id on an
in-memory revocation list, which is lost when the process restarts.
"""

from __future__ import annotations

import logging
import time
from typing import Dict

from flask import Flask, current_app, jsonify
from flask_jwt_extended import JWTManager

from fintrack.storage import get_storage

logger = logging.getLogger(__name__)

EXTENSION_KEY = "fintrack.revoked_tokens"


class RevokedTokenStore:
    def __init__(self):
        # jti -> unix time the token would have expired anyway
        self._revoked: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._revoked)

    def revoke(self, jti: str, expires_at: float) -> None:
        self._revoked[jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        self.prune()
        return jti in self._revoked

    def prune(self, now: float | None = None) -> None:
        now = time.time() if now is None else now
        for jti in [j for j, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]


def get_revoked_tokens() -> RevokedTokenStore:
    return current_app.extensions[EXTENSION_KEY]


def _unauthorized(message="Unauthorized"):
    return jsonify({"message": message}), 401


def init_sessions(app: Flask) -> JWTManager:
    jwt = JWTManager(app)
    app.extensions[EXTENSION_KEY] = RevokedTokenStore()

    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header, jwt_payload):
        return get_revoked_tokens().is_revoked(jwt_payload["jti"])

    @jwt.user_lookup_loader
    def _load_user(jwt_header, jwt_payload):
        try:
            user_id = int(jwt_payload["sub"])
        except (TypeError, ValueError):
            return None
        return get_storage().get_user(user_id)

    @jwt.user_lookup_error_loader
    def _user_missing(jwt_header, jwt_payload):
        logger.info("Session refers to unknown user %r", jwt_payload.get("sub"))
        return _unauthorized()

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return _unauthorized()

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        logger.info("Rejected invalid session token: %s", reason)
        return _unauthorized()

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _unauthorized("Session expired")

    @jwt.revoked_token_loader
    def _revoked_token(jwt_header, jwt_payload):
        return _unauthorized()

    return jwt
