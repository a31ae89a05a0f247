from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ForbiddenError, ResourceNotFoundError
from ..users.repository import DirectoryRepository


@dataclass(frozen=True)
class AuthDecision:
    allowed: bool
    reason: str


def is_direct_manager(directory: DirectoryRepository, actor_id: int, target_user_id: int) -> bool:
    manager = directory.find_manager_of(int(target_user_id))
    return manager is not None and manager.user_id == int(actor_id)


def is_admin(directory: DirectoryRepository, actor_id: int) -> bool:
    return bool(directory.has_admin_permission(int(actor_id)))


def is_substitute_delegate(directory: DirectoryRepository, actor_id: int, target_user_id: int) -> bool:
    """Actor was registered as substitute by the target's manager (one hop only)."""
    manager = directory.find_manager_of(int(target_user_id))
    if manager is None:
        return False
    return any(u.user_id == int(actor_id) for u in directory.find_substitute_delegates_of(manager.user_id))


def can_manage_user(directory: DirectoryRepository, actor_id: int, target_user_id: int) -> AuthDecision:
    if is_direct_manager(directory, actor_id, target_user_id):
        return AuthDecision(True, "direct manager")
    if is_admin(directory, actor_id):
        return AuthDecision(True, "admin permission")
    if is_substitute_delegate(directory, actor_id, target_user_id):
        return AuthDecision(True, "substitute of the manager")
    return AuthDecision(False, "not the manager, a substitute of the manager or an admin")


def require_can_manage(directory: DirectoryRepository, actor_id: int, target_user_id: int) -> AuthDecision:
    """Raise unless actor may manage target's time entries.

    Missing actor or target -> ResourceNotFoundError; unrelated -> ForbiddenError.
    """
    if not directory.find_user(int(actor_id)):
        raise ResourceNotFoundError(f"User not found: {actor_id}")
    if not directory.find_user(int(target_user_id)):
        raise ResourceNotFoundError(f"User not found: {target_user_id}")

    decision = can_manage_user(directory, actor_id, target_user_id)
    if not decision.allowed:
        raise ForbiddenError(f"User {actor_id} may not manage time entries of user {target_user_id}")
    return decision
