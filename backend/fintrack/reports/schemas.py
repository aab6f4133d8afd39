from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from pydantic import model_validator

from fintrack.storage.entities import ApiModel


class ReportQuerySchema(ApiModel):
    """?start=YYYY-MM-DD&end=YYYY-MM-DD, both optional and inclusive."""

    start: Optional[date] = None
    end: Optional[date] = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError("start must not be after end")
        return self

    def start_at(self) -> Optional[datetime]:
        return datetime.combine(self.start, time.min) if self.start else None

    def end_at(self) -> Optional[datetime]:
        return datetime.combine(self.end, time.max) if self.end else None
