from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a directory user as seen by the time-tracking core.

    Note: Relations (manager, substitutes) are looked up by id through the
    directory repository, never held as object references.
    """

    user_id: int
    full_name: str
    username: str
    manager_id: Optional[int] = None
    is_active: bool = True
