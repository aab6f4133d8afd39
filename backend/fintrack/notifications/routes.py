from __future__ import annotations

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, current_user

from fintrack.auth.guards import owned_or_abort
from fintrack.storage import get_storage
from fintrack.storage.entities import dump

from .schemas import NotificationSchema

notifications_bp = Blueprint("notifications", __name__, url_prefix="/api/notifications")


@notifications_bp.route("", methods=["GET"])
@jwt_required()
def list_notifications():
    """Newest first."""
    return jsonify(dump(get_storage().get_notifications(current_user.id))), 200


@notifications_bp.route("", methods=["POST"])
@jwt_required()
def create_notification():
    # new notifications always start unread
    data = NotificationSchema.model_validate(request.get_json(silent=True) or {})
    notification = get_storage().create_notification(
        {"user_id": current_user.id, "message": data.message, "read": False}
    )
    return jsonify(notification.to_json()), 201


@notifications_bp.route("/<int:notification_id>/read", methods=["POST"])
@jwt_required()
def mark_read(notification_id):
    storage = get_storage()
    owned_or_abort(storage.get_notification(notification_id), "Notification")

    return jsonify(storage.mark_notification_as_read(notification_id).to_json()), 200


@notifications_bp.route("/read-all", methods=["POST"])
@jwt_required()
def mark_all_read():
    marked = get_storage().mark_all_notifications_as_read(current_user.id)
    return jsonify({"message": "All notifications marked as read", "marked": marked}), 200


@notifications_bp.route("/<int:notification_id>", methods=["DELETE"])
@jwt_required()
def delete_notification(notification_id):
    storage = get_storage()
    owned_or_abort(storage.get_notification(notification_id), "Notification")

    storage.delete_notification(notification_id)
    return jsonify({"message": "Notification deleted successfully"}), 200
