from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class DirectoryRepository(Protocol):
    """Read-only view of the user/organization directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def find_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def find_manager_of(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def find_subordinates_of(self, manager_id: int) -> Sequence[User]:
        raise NotImplementedError

    def find_substitute_delegates_of(self, manager_id: int) -> Sequence[User]:
        """Users the manager registered as substitutes."""

        raise NotImplementedError

    def find_managers_delegating_to(self, substitute_id: int) -> Sequence[User]:
        """Managers who registered the given user as their substitute."""

        raise NotImplementedError

    def has_admin_permission(self, user_id: int) -> bool:
        raise NotImplementedError
