from __future__ import annotations

from typing import Optional

from pydantic import Field

from fintrack.storage.entities import ApiModel, EntryType, Timestamp


class TransactionSchema(ApiModel):
    amount: float = Field(gt=0)
    category: str = Field(min_length=1)
    description: str
    date: Optional[Timestamp] = None
    type: EntryType
    recurring: bool = False
    note: Optional[str] = None


class TransactionUpdateSchema(ApiModel):
    amount: Optional[float] = Field(default=None, gt=0)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    date: Optional[Timestamp] = None
    type: Optional[EntryType] = None
    recurring: Optional[bool] = None
    note: Optional[str] = None


class IncomeSchema(ApiModel):
    source: str = Field(min_length=1)
    amount: float = Field(gt=0)
    date: Optional[Timestamp] = None
    recurring: bool = False


class IncomeUpdateSchema(ApiModel):
    source: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    date: Optional[Timestamp] = None
    recurring: Optional[bool] = None


class CategorySchema(ApiModel):
    name: str = Field(min_length=1)
    type: EntryType = "expense"


class CategoryUpdateSchema(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[EntryType] = None
