"""
Entity records shared by every storage backend.

Fields are snake_case in Python and camelCase on the wire; both spellings
are accepted when validating.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Iterable, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# All timestamps are kept as naive UTC so the SQL and memory stores compare alike.
Timestamp = Annotated[datetime, AfterValidator(_naive_utc)]

EntryType = Literal["income", "expense"]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, **kwargs) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, **kwargs)

    def changes(self, *nullable: str) -> Dict[str, Any]:
        """Fields the client actually sent. An explicit null only counts for nullable fields."""
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k in nullable
        }


class Entity(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int


class User(Entity):
    username: str
    name: str
    email: str
    password: str
    created_at: Timestamp = Field(default_factory=utcnow)

    def public(self) -> Dict[str, Any]:
        return self.to_json(exclude={"password"})


class Transaction(Entity):
    user_id: int
    amount: float
    category: str
    description: str
    date: Timestamp = Field(default_factory=utcnow)
    type: EntryType
    recurring: bool = False
    note: Optional[str] = None


class Category(Entity):
    user_id: int
    name: str
    type: EntryType = "expense"
    created_at: Timestamp = Field(default_factory=utcnow)


class Income(Entity):
    user_id: int
    source: str
    amount: float
    date: Timestamp = Field(default_factory=utcnow)
    recurring: bool = False


class Budget(Entity):
    user_id: int
    category: str
    amount: float
    period: str


class Goal(Entity):
    user_id: int
    name: str
    target_amount: float
    current_amount: float = 0
    deadline: Optional[Timestamp] = None


class Notification(Entity):
    user_id: int
    message: str
    read: bool = False
    created_at: Timestamp = Field(default_factory=utcnow)


# table name -> record type
ENTITY_TYPES = {
    "users": User,
    "transactions": Transaction,
    "categories": Category,
    "incomes": Income,
    "budgets": Budget,
    "goals": Goal,
    "notifications": Notification,
}


def dump(value: Union[ApiModel, Iterable[ApiModel], None]) -> Any:
    """JSON-ready form of a record or a list of records."""
    if value is None:
        return None
    if isinstance(value, ApiModel):
        return value.to_json()
    return [item.to_json() for item in value]


class CategorySummary(ApiModel):
    category: str
    value: float
    percentage: int = 0


class SpendingReport(ApiModel):
    total: float = 0.0
    by_category: Dict[str, float] = Field(default_factory=dict)


class FinancialSummary(ApiModel):
    balance: float = 0.0
    income: float = 0.0
    expenses: float = 0.0
    savings_rate: float = 0.0


class BudgetProgress(ApiModel):
    budget: Budget
    spent: float
    percentage: float
    exceeded: bool

