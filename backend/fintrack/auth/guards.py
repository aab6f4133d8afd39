from __future__ import annotations

from typing import Optional, TypeVar

from flask import abort
from flask_jwt_extended import current_user

from fintrack.storage.entities import Entity

E = TypeVar("E", bound=Entity)


def owned_or_abort(entity: Optional[E], label: str) -> E:
    """404 if the entity doesn't exist, 403 if it belongs to someone else."""
    if entity is None:
        abort(404, description=f"{label} not found")
    if entity.user_id != current_user.id:
        abort(403, description="Forbidden")
    return entity
