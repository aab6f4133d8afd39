from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from .entities import (
    Budget,
    BudgetProgress,
    Category,
    CategorySummary,
    Entity,
    FinancialSummary,
    Goal,
    Income,
    Notification,
    SpendingReport,
    Transaction,
    User,
)


class Storage(ABC):
    """
    Table-per-entity key-value store.

    Backends implement the generic row operations; everything else
    (per-entity helpers, analytics) is built on top of them here.
    Rows come back in id order, which is insertion order.
    """

    # -------------------------
    # Row primitives
    # -------------------------

    @abstractmethod
    def get(self, table: str, row_id: int) -> Optional[Entity]:
        ...

    @abstractmethod
    def rows(self, table: str, user_id: Optional[int] = None) -> List[Entity]:
        """All rows of a table, optionally only those owned by user_id."""

    @abstractmethod
    def insert(self, table: str, data: Dict[str, Any]) -> Entity:
        """Store a new row; the store assigns the id."""

    @abstractmethod
    def update(self, table: str, row_id: int, changes: Dict[str, Any]) -> Optional[Entity]:
        ...

    @abstractmethod
    def delete(self, table: str, row_id: int) -> bool:
        ...

    @contextmanager
    def batch(self) -> Iterator["Storage"]:
        """Group several writes. Only transactional on backends that support it."""
        yield self

    def find(self, table: str, predicate: Callable[[Entity], bool]) -> Optional[Entity]:
        for row in self.rows(table):
            if predicate(row):
                return row
        return None

    def delete_owned(self, table: str, user_id: int) -> int:
        owned = self.rows(table, user_id)
        for row in owned:
            self.delete(table, row.id)
        return len(owned)

    # -------------------------
    # Users
    # -------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self.get("users", user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.find("users", lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.find("users", lambda u: u.email.lower() == email.lower())

    def create_user(self, data: Dict[str, Any]) -> User:
        return self.insert("users", data)

    # -------------------------
    # Notifications
    # -------------------------

    def get_notifications(self, user_id: int) -> List[Notification]:
        return sorted(self.rows("notifications", user_id), key=lambda n: (n.created_at, n.id), reverse=True)

    def get_notification(self, notification_id: int) -> Optional[Notification]:
        return self.get("notifications", notification_id)

    def create_notification(self, data: Dict[str, Any]) -> Notification:
        return self.insert("notifications", data)

    def mark_notification_as_read(self, notification_id: int) -> Optional[Notification]:
        return self.update("notifications", notification_id, {"read": True})

    def mark_all_notifications_as_read(self, user_id: int) -> int:
        marked = 0
        for notification in self.rows("notifications", user_id):
            if not notification.read:
                self.update("notifications", notification.id, {"read": True})
                marked += 1
        return marked

    def delete_notification(self, notification_id: int) -> bool:
        return self.delete("notifications", notification_id)

    # -------------------------
    # Transactions
    # -------------------------

    def get_transactions(self, user_id: int) -> List[Transaction]:
        return sorted(self.rows("transactions", user_id), key=lambda t: (t.date, t.id), reverse=True)

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.get("transactions", transaction_id)

    def create_transaction(self, data: Dict[str, Any]) -> Transaction:
        return self.insert("transactions", data)

    def update_transaction(self, transaction_id: int, changes: Dict[str, Any]) -> Optional[Transaction]:
        return self.update("transactions", transaction_id, changes)

    def delete_transaction(self, transaction_id: int) -> bool:
        return self.delete("transactions", transaction_id)

    # -------------------------
    # Categories
    # -------------------------

    def get_categories(self, user_id: int) -> List[Category]:
        return self.rows("categories", user_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.get("categories", category_id)

    def get_category_by_name(self, user_id: int, name: str) -> Optional[Category]:
        wanted = name.lower()
        return self.find(
            "categories", lambda c: c.user_id == user_id and c.name.lower() == wanted
        )

    def create_category(self, data: Dict[str, Any]) -> Category:
        return self.insert("categories", data)

    def update_category(self, category_id: int, changes: Dict[str, Any]) -> Optional[Category]:
        return self.update("categories", category_id, changes)

    def delete_category(self, category_id: int) -> bool:
        return self.delete("categories", category_id)

    # -------------------------
    # Incomes
    # -------------------------

    def get_incomes(self, user_id: int) -> List[Income]:
        return sorted(self.rows("incomes", user_id), key=lambda i: (i.date, i.id), reverse=True)

    def get_income(self, income_id: int) -> Optional[Income]:
        return self.get("incomes", income_id)

    def create_income(self, data: Dict[str, Any]) -> Income:
        return self.insert("incomes", data)

    def update_income(self, income_id: int, changes: Dict[str, Any]) -> Optional[Income]:
        return self.update("incomes", income_id, changes)

    def delete_income(self, income_id: int) -> bool:
        return self.delete("incomes", income_id)

    # -------------------------
    # Budgets
    # -------------------------

    def get_budgets(self, user_id: int) -> List[Budget]:
        return self.rows("budgets", user_id)

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        return self.get("budgets", budget_id)

    def create_budget(self, data: Dict[str, Any]) -> Budget:
        return self.insert("budgets", data)

    def update_budget(self, budget_id: int, changes: Dict[str, Any]) -> Optional[Budget]:
        return self.update("budgets", budget_id, changes)

    def delete_budget(self, budget_id: int) -> bool:
        return self.delete("budgets", budget_id)

    # -------------------------
    # Goals
    # -------------------------

    def get_goals(self, user_id: int) -> List[Goal]:
        return self.rows("goals", user_id)

    def get_goal(self, goal_id: int) -> Optional[Goal]:
        return self.get("goals", goal_id)

    def create_goal(self, data: Dict[str, Any]) -> Goal:
        return self.insert("goals", data)

    def update_goal(self, goal_id: int, changes: Dict[str, Any]) -> Optional[Goal]:
        return self.update("goals", goal_id, changes)

    def delete_goal(self, goal_id: int) -> bool:
        return self.delete("goals", goal_id)

    # -------------------------
    # Analytics
    # -------------------------

    def get_spending_by_category(self, user_id: int) -> List[CategorySummary]:
        from fintrack.reports.analysis import spending_by_category

        return spending_by_category(self.get_transactions(user_id))

    def get_spending_report(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> SpendingReport:
        from fintrack.reports.analysis import filter_by_date, spending_report

        return spending_report(filter_by_date(self.get_transactions(user_id), start, end))

    def get_financial_summary(self, user_id: int) -> FinancialSummary:
        from fintrack.reports.analysis import financial_summary

        return financial_summary(self.get_transactions(user_id))

    def get_budget_progress(self, user_id: int, now: Optional[datetime] = None) -> List[BudgetProgress]:
        from fintrack.reports.analysis import budget_progress

        return budget_progress(self.get_budgets(user_id), self.get_transactions(user_id), now=now)
