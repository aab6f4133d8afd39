from __future__ import annotations

from typing import Any, List, Optional

from fintrack.ledger.schemas import CategorySchema, IncomeSchema, TransactionSchema
from fintrack.planning.schemas import BudgetSchema, GoalSchema
from fintrack.storage.entities import ApiModel, Timestamp


class CategoryRowSchema(CategorySchema):
    # keep the original creation time when a category comes back from a backup
    created_at: Optional[Timestamp] = None


class BackupEnvelope(ApiModel):
    """
    Outer shape of a backup. Every collection is optional but, when present,
    must be a list; individual rows are checked separately.
    """

    transactions: Optional[List[Any]] = None
    incomes: Optional[List[Any]] = None
    budgets: Optional[List[Any]] = None
    goals: Optional[List[Any]] = None
    categories: Optional[List[Any]] = None


class RestoreSchema(ApiModel):
    data: BackupEnvelope


# collection name -> schema every row of that collection must satisfy
ROW_SCHEMAS = {
    "transactions": TransactionSchema,
    "incomes": IncomeSchema,
    "budgets": BudgetSchema,
    "goals": GoalSchema,
    "categories": CategoryRowSchema,
}
