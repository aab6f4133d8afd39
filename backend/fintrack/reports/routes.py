from __future__ import annotations

from flask import Blueprint, Response, request, jsonify
from flask_jwt_extended import jwt_required, current_user

from fintrack.storage import get_storage
from fintrack.storage.entities import dump

from .analysis import filter_by_date
from .csv_export import transactions_to_csv
from .schemas import ReportQuerySchema

reports_bp = Blueprint("reports", __name__, url_prefix="/api")


def _query():
    return ReportQuerySchema.model_validate(request.args.to_dict())


@reports_bp.route("/insights/spending", methods=["GET"])
@jwt_required()
def spending_insights():
    """[{category, value, percentage}] over expenses, largest first."""
    return jsonify(dump(get_storage().get_spending_by_category(current_user.id))), 200


@reports_bp.route("/reports/spending", methods=["GET"])
@jwt_required()
def spending_report():
    q = _query()
    report = get_storage().get_spending_report(current_user.id, start=q.start_at(), end=q.end_at())
    return jsonify(report.to_json()), 200


@reports_bp.route("/reports/summary", methods=["GET"])
@jwt_required()
def financial_summary():
    """Balance, income, expenses and savings rate over all transactions."""
    return jsonify(get_storage().get_financial_summary(current_user.id).to_json()), 200


@reports_bp.route("/reports/download", methods=["GET"])
@jwt_required()
def download_report():
    q = _query()
    transactions = filter_by_date(
        get_storage().get_transactions(current_user.id), q.start_at(), q.end_at()
    )
    return Response(
        transactions_to_csv(transactions),
        status=200,
        mimetype="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )
