from __future__ import annotations

from typing import Optional

from pydantic import Field

from fintrack.storage.entities import ApiModel, Timestamp


class BudgetSchema(ApiModel):
    category: str = Field(min_length=1)
    amount: float = Field(gt=0)
    period: str = Field(min_length=1, description="monthly, yearly, ...")


class BudgetUpdateSchema(ApiModel):
    category: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    period: Optional[str] = Field(default=None, min_length=1)


class GoalSchema(ApiModel):
    name: str = Field(min_length=1)
    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0, ge=0)
    deadline: Optional[Timestamp] = None


class GoalUpdateSchema(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    target_amount: Optional[float] = Field(default=None, gt=0)
    current_amount: Optional[float] = Field(default=None, ge=0)
    deadline: Optional[Timestamp] = None
