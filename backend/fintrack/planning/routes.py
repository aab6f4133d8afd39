from __future__ import annotations

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, current_user

from fintrack.auth.guards import owned_or_abort
from fintrack.storage import get_storage
from fintrack.storage.entities import dump

from .schemas import BudgetSchema, BudgetUpdateSchema, GoalSchema, GoalUpdateSchema

planning_bp = Blueprint("planning", __name__, url_prefix="/api")


def _body():
    return request.get_json(silent=True) or {}


# -------------------------
# Budgets
# -------------------------


@planning_bp.route("/budgets", methods=["GET"])
@jwt_required()
def list_budgets():
    return jsonify(dump(get_storage().get_budgets(current_user.id))), 200


@planning_bp.route("/budgets", methods=["POST"])
@jwt_required()
def create_budget():
    data = BudgetSchema.model_validate(_body())
    budget = get_storage().create_budget({**data.model_dump(), "user_id": current_user.id})
    return jsonify(budget.to_json()), 201


@planning_bp.route("/budgets/progress", methods=["GET"])
@jwt_required()
def budget_progress():
    """
    Spending against each budget for the current calendar month:
    [{budget, spent, percentage, exceeded}, ...]
    """
    return jsonify(dump(get_storage().get_budget_progress(current_user.id))), 200


@planning_bp.route("/budgets/<int:budget_id>", methods=["PATCH"])
@jwt_required()
def update_budget(budget_id):
    storage = get_storage()
    owned_or_abort(storage.get_budget(budget_id), "Budget")

    changes = BudgetUpdateSchema.model_validate(_body()).changes()
    return jsonify(storage.update_budget(budget_id, changes).to_json()), 200


@planning_bp.route("/budgets/<int:budget_id>", methods=["DELETE"])
@jwt_required()
def delete_budget(budget_id):
    storage = get_storage()
    owned_or_abort(storage.get_budget(budget_id), "Budget")

    storage.delete_budget(budget_id)
    return jsonify({"message": "Budget deleted successfully"}), 200


# -------------------------
# Goals
# -------------------------


@planning_bp.route("/goals", methods=["GET"])
@jwt_required()
def list_goals():
    return jsonify(dump(get_storage().get_goals(current_user.id))), 200


@planning_bp.route("/goals", methods=["POST"])
@jwt_required()
def create_goal():
    data = GoalSchema.model_validate(_body())
    goal = get_storage().create_goal({**data.model_dump(), "user_id": current_user.id})
    return jsonify(goal.to_json()), 201


@planning_bp.route("/goals/<int:goal_id>", methods=["PATCH"])
@jwt_required()
def update_goal(goal_id):
    storage = get_storage()
    owned_or_abort(storage.get_goal(goal_id), "Goal")

    changes = GoalUpdateSchema.model_validate(_body()).changes("deadline")
    return jsonify(storage.update_goal(goal_id, changes).to_json()), 200


@planning_bp.route("/goals/<int:goal_id>", methods=["DELETE"])
@jwt_required()
def delete_goal(goal_id):
    storage = get_storage()
    owned_or_abort(storage.get_goal(goal_id), "Goal")

    storage.delete_goal(goal_id)
    return jsonify({"message": "Goal deleted successfully"}), 200
