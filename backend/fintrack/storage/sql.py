from __future__ import annotations

import logging
from contextlib import contextmanager

from fintrack.models import db
from fintrack.models.finance_models import (
    BudgetRecord,
    CategoryRecord,
    GoalRecord,
    IncomeRecord,
    NotificationRecord,
)
from fintrack.models.transaction_model import TransactionRecord
from fintrack.models.user_model import UserRecord

from .base import Storage
from .entities import ENTITY_TYPES

logger = logging.getLogger(__name__)

MODELS = {
    "users": UserRecord,
    "transactions": TransactionRecord,
    "categories": CategoryRecord,
    "incomes": IncomeRecord,
    "budgets": BudgetRecord,
    "goals": GoalRecord,
    "notifications": NotificationRecord,
}


class SqlStorage(Storage):
    """
    Relational store on top of Flask-SQLAlchemy.

    Must be used inside an application context. Each write commits on its
    own unless it runs inside batch(), in which case the whole batch is one
    database transaction.
    """

    def __init__(self):
        self._batch_depth = 0

    def _model(self, table):
        try:
            return MODELS[table]
        except KeyError:
            raise KeyError(f"Unknown table: {table}") from None

    def _to_entity(self, table, record):
        return ENTITY_TYPES[table].model_validate(record)

    def _commit(self):
        if self._batch_depth:
            db.session.flush()
        else:
            db.session.commit()

    @contextmanager
    def batch(self):
        self._batch_depth += 1
        try:
            yield self
        except Exception:
            self._batch_depth -= 1
            if not self._batch_depth:
                db.session.rollback()
                logger.warning("Rolled back batched writes")
            raise
        else:
            self._batch_depth -= 1
            if not self._batch_depth:
                db.session.commit()

    def get(self, table, row_id):
        record = db.session.get(self._model(table), row_id)
        return self._to_entity(table, record) if record is not None else None

    def rows(self, table, user_id=None):
        model = self._model(table)
        q = model.query
        if user_id is not None:
            q = q.filter_by(user_id=user_id)
        return [self._to_entity(table, r) for r in q.order_by(model.id).all()]

    def insert(self, table, data):
        payload = {k: v for k, v in data.items() if k != "id"}
        # run the same validation the memory store applies
        ENTITY_TYPES[table].model_validate({**payload, "id": 0})
        record = self._model(table)(**payload)
        db.session.add(record)
        self._commit()
        return self._to_entity(table, record)

    def update(self, table, row_id, changes):
        record = db.session.get(self._model(table), row_id)
        if record is None:
            return None
        for key, value in changes.items():
            if key != "id":
                setattr(record, key, value)
        self._commit()
        return self._to_entity(table, record)

    def delete(self, table, row_id):
        record = db.session.get(self._model(table), row_id)
        if record is None:
            return False
        db.session.delete(record)
        self._commit()
        return True
