"""
Per-user backup and restore.

restore_backup() is destructive: it deletes every row the user owns in the
five backed-up collections and re-inserts what the backup carries. A
collection missing from the backup is left empty. On the memory store the
delete/insert sequence is not atomic; the SQL store runs it in a single
transaction.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from fintrack.storage.base import Storage
from fintrack.storage.entities import dump

from .schemas import BackupEnvelope, ROW_SCHEMAS

logger = logging.getLogger(__name__)

COLLECTIONS = ("transactions", "incomes", "budgets", "goals", "categories")

DUPLICATE_CATEGORY = {
    "type": "duplicate",
    "loc": ["name"],
    "msg": "Category with this name already exists",
}


@dataclass
class RejectedRow:
    collection: str
    index: int
    errors: List[Dict[str, Any]]


@dataclass
class RestoreResult:
    restored: Dict[str, int] = field(default_factory=dict)
    rejected: List[RejectedRow] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def create_backup(storage: Storage, user_id: int) -> Dict[str, List[dict]]:
    """Every row the user owns in each collection, in store order."""
    return {name: dump(storage.rows(name, user_id)) for name in COLLECTIONS}


def validate_rows(envelope: BackupEnvelope):
    """
    Check each row against its collection's schema.

    Returns (accepted, rejected). accepted maps collection -> list of row
    dicts ready for insertion, or None when the backup doesn't carry that
    collection at all.
    """
    accepted: Dict[str, Optional[List[dict]]] = {}
    rejected: List[RejectedRow] = []

    for name in COLLECTIONS:
        rows = getattr(envelope, name)
        if rows is None:
            accepted[name] = None
            continue

        schema = ROW_SCHEMAS[name]
        good = []
        seen_names = set()
        for index, row in enumerate(rows):
            try:
                parsed = schema.model_validate(row)
            except ValidationError as e:
                rejected.append(RejectedRow(name, index, json.loads(e.json(include_url=False))))
                continue

            # category names are unique per user, ignoring case
            if name == "categories":
                key = parsed.name.lower()
                if key in seen_names:
                    rejected.append(RejectedRow(name, index, [DUPLICATE_CATEGORY]))
                    continue
                seen_names.add(key)

            good.append(parsed.model_dump(exclude_none=True))
        accepted[name] = good

    return accepted, rejected


def restore_backup(
    storage: Storage,
    user_id: int,
    data: Union[BackupEnvelope, Dict[str, Any]],
) -> RestoreResult:
    envelope = data if isinstance(data, BackupEnvelope) else BackupEnvelope.model_validate(data)
    accepted, rejected = validate_rows(envelope)

    result = RestoreResult(rejected=rejected)
    with storage.batch():
        for name in COLLECTIONS:
            removed = storage.delete_owned(name, user_id)
            logger.debug("Cleared %d %s for user %s", removed, name, user_id)

        for name in COLLECTIONS:
            rows = accepted[name]
            if rows is None:
                continue
            for row in rows:
                # ids are reassigned and ownership is always the caller's
                storage.insert(name, {**row, "user_id": user_id})
            result.restored[name] = len(rows)

    if rejected:
        logger.warning("Restore for user %s rejected %d row(s)", user_id, len(rejected))
    logger.info("Restored %s for user %s", result.restored, user_id)
    return result
