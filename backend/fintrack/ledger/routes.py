from __future__ import annotations

import logging

from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import jwt_required, current_user

from fintrack.auth.guards import owned_or_abort
from fintrack.storage import get_storage
from fintrack.storage.entities import dump

from .schemas import (
    CategorySchema,
    CategoryUpdateSchema,
    IncomeSchema,
    IncomeUpdateSchema,
    TransactionSchema,
    TransactionUpdateSchema,
)

logger = logging.getLogger(__name__)

ledger_bp = Blueprint("ledger", __name__, url_prefix="/api")


def _body():
    return request.get_json(silent=True) or {}


def _err(message, status=400):
    return jsonify({"message": message}), status


# -------------------------
# Transactions
# -------------------------


@ledger_bp.route("/transactions", methods=["GET"])
@jwt_required()
def list_transactions():
    """Current user's transactions, newest first."""
    return jsonify(dump(get_storage().get_transactions(current_user.id))), 200


@ledger_bp.route("/transactions", methods=["POST"])
@jwt_required()
def create_transaction():
    data = TransactionSchema.model_validate(_body())
    storage = get_storage()

    transaction = storage.create_transaction(
        {**data.model_dump(exclude_none=True), "user_id": current_user.id}
    )

    threshold = current_app.config.get("LARGE_EXPENSE_THRESHOLD", 100)
    if transaction.type == "expense" and transaction.amount > threshold:
        storage.create_notification(
            {
                "user_id": current_user.id,
                "message": (
                    f"Large expense of ${transaction.amount:.2f} recorded for "
                    f"{transaction.category}."
                ),
                "read": False,
            }
        )

    return jsonify(transaction.to_json()), 201


@ledger_bp.route("/transactions/<int:transaction_id>", methods=["GET"])
@jwt_required()
def get_transaction(transaction_id):
    transaction = owned_or_abort(get_storage().get_transaction(transaction_id), "Transaction")
    return jsonify(transaction.to_json()), 200


@ledger_bp.route("/transactions/<int:transaction_id>", methods=["PATCH"])
@jwt_required()
def update_transaction(transaction_id):
    storage = get_storage()
    owned_or_abort(storage.get_transaction(transaction_id), "Transaction")

    changes = TransactionUpdateSchema.model_validate(_body()).changes("note")
    transaction = storage.update_transaction(transaction_id, changes)
    return jsonify(transaction.to_json()), 200


@ledger_bp.route("/transactions/<int:transaction_id>", methods=["DELETE"])
@jwt_required()
def delete_transaction(transaction_id):
    storage = get_storage()
    owned_or_abort(storage.get_transaction(transaction_id), "Transaction")

    storage.delete_transaction(transaction_id)
    return jsonify({"message": "Transaction deleted successfully"}), 200


# -------------------------
# Incomes
# -------------------------


@ledger_bp.route("/incomes", methods=["GET"])
@jwt_required()
def list_incomes():
    return jsonify(dump(get_storage().get_incomes(current_user.id))), 200


@ledger_bp.route("/incomes", methods=["POST"])
@jwt_required()
def create_income():
    data = IncomeSchema.model_validate(_body())
    income = get_storage().create_income(
        {**data.model_dump(exclude_none=True), "user_id": current_user.id}
    )
    return jsonify(income.to_json()), 201


@ledger_bp.route("/incomes/<int:income_id>", methods=["GET"])
@jwt_required()
def get_income(income_id):
    income = owned_or_abort(get_storage().get_income(income_id), "Income")
    return jsonify(income.to_json()), 200


@ledger_bp.route("/incomes/<int:income_id>", methods=["PATCH"])
@jwt_required()
def update_income(income_id):
    storage = get_storage()
    owned_or_abort(storage.get_income(income_id), "Income")

    changes = IncomeUpdateSchema.model_validate(_body()).changes()
    income = storage.update_income(income_id, changes)
    return jsonify(income.to_json()), 200


@ledger_bp.route("/incomes/<int:income_id>", methods=["DELETE"])
@jwt_required()
def delete_income(income_id):
    storage = get_storage()
    owned_or_abort(storage.get_income(income_id), "Income")

    storage.delete_income(income_id)
    return jsonify({"message": "Income deleted successfully"}), 200


# -------------------------
# Categories
# -------------------------


@ledger_bp.route("/categories", methods=["GET"])
@jwt_required()
def list_categories():
    return jsonify(dump(get_storage().get_categories(current_user.id))), 200


@ledger_bp.route("/categories", methods=["POST"])
@jwt_required()
def create_category():
    data = CategorySchema.model_validate(_body())
    storage = get_storage()

    # names are unique per user, ignoring case
    if storage.get_category_by_name(current_user.id, data.name):
        return _err("Category with this name already exists")

    category = storage.create_category({**data.model_dump(), "user_id": current_user.id})
    return jsonify(category.to_json()), 201


@ledger_bp.route("/categories/<int:category_id>", methods=["PATCH"])
@jwt_required()
def update_category(category_id):
    storage = get_storage()
    owned_or_abort(storage.get_category(category_id), "Category")

    changes = CategoryUpdateSchema.model_validate(_body()).changes()
    if "name" in changes:
        clash = storage.get_category_by_name(current_user.id, changes["name"])
        if clash and clash.id != category_id:
            return _err("Category with this name already exists")

    category = storage.update_category(category_id, changes)
    return jsonify(category.to_json()), 200


@ledger_bp.route("/categories/<int:category_id>", methods=["DELETE"])
@jwt_required()
def delete_category(category_id):
    storage = get_storage()
    owned_or_abort(storage.get_category(category_id), "Category")

    storage.delete_category(category_id)
    logger.info("User %s deleted category %s", current_user.id, category_id)
    return jsonify({"message": "Category deleted successfully"}), 200
