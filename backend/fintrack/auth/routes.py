# backend/fintrack/auth/routes.py

import logging

from flask import Blueprint, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    current_user,
    get_jwt,
    jwt_required,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from pydantic import ValidationError

from fintrack.errors import validation_error_response
from .schemas import RegisterSchema, LoginSchema
from .services import register_user, login_user
from .sessions import get_revoked_tokens

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.route("/register", methods=["POST"])
def register():

    try:
        data = RegisterSchema.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error_response(e)

    user, error = register_user(data)

    if error:
        return jsonify({"message": error}), 400

    return jsonify(user.public()), 201


@auth_bp.route("/login", methods=["POST"])
def login():

    try:
        data = LoginSchema.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error_response(e)

    user, error = login_user(data)

    if error:
        return jsonify({"message": error}), 401

    response = jsonify(user.public())
    set_access_cookies(response, create_access_token(identity=str(user.id)))
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Always succeeds; revokes the caller's token when there is a valid one."""
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        logger.debug("Logout with unusable token: %s", e)
    else:
        token = get_jwt()
        if token:
            get_revoked_tokens().revoke(token["jti"], token["exp"])

    response = jsonify({"message": "Logged out successfully"})
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify(current_user.public()), 200
