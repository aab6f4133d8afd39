from __future__ import annotations

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, current_user

from fintrack.storage import get_storage

from .schemas import RestoreSchema
from .services import create_backup, restore_backup

backup_bp = Blueprint("backup", __name__, url_prefix="/api")

RESTORED_MESSAGE = "Your data has been successfully restored."


@backup_bp.route("/backup", methods=["POST"])
@jwt_required()
def backup():
    return jsonify(create_backup(get_storage(), current_user.id)), 200


@backup_bp.route("/restore", methods=["POST"])
@jwt_required()
def restore():
    """
    Body: {"data": {"transactions": [...], "incomes": [...], ...}}

    Replaces the caller's data with the backup. Rows that fail validation
    are skipped and listed under "rejected".
    """
    payload = RestoreSchema.model_validate(request.get_json(silent=True) or {})
    storage = get_storage()

    result = restore_backup(storage, current_user.id, payload.data)

    storage.create_notification(
        {"user_id": current_user.id, "message": RESTORED_MESSAGE, "read": False}
    )

    return jsonify({"message": "Data restored successfully", **result.to_dict()}), 200
