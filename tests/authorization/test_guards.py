from __future__ import annotations

import pytest

from src.timekeeping.timekeeping.authorization.guards import (
    can_manage_user,
    is_admin,
    is_direct_manager,
    is_substitute_delegate,
    require_can_manage,
)
from src.timekeeping.timekeeping.core.exceptions import ForbiddenError, ResourceNotFoundError
from tests.world import ADMIN, ALICE, BOB, CAROL, MANAGER, OUTSIDER, SUBSTITUTE


def test_predicates(world):
    d = world.directory

    assert is_direct_manager(d, MANAGER, ALICE)
    assert not is_direct_manager(d, SUBSTITUTE, ALICE)
    assert is_admin(d, ADMIN)
    assert not is_admin(d, MANAGER)
    assert is_substitute_delegate(d, SUBSTITUTE, BOB)
    assert not is_substitute_delegate(d, MANAGER, CAROL)


@pytest.mark.parametrize(
    "actor, target, allowed, reason",
    [
        (MANAGER, ALICE, True, "direct manager"),
        (ADMIN, CAROL, True, "admin permission"),
        (SUBSTITUTE, ALICE, True, "substitute of the manager"),
        (SUBSTITUTE, CAROL, True, "direct manager"),
        (OUTSIDER, ALICE, False, None),
        (ALICE, BOB, False, None),
        (MANAGER, CAROL, False, None),
    ],
)
def test_can_manage_user(world, actor, target, allowed, reason):
    decision = can_manage_user(world.directory, actor, target)

    assert decision.allowed is allowed
    if reason:
        assert decision.reason == reason


def test_substitution_is_one_hop_only(world):
    # CAROL reports to SUBSTITUTE; MANAGER delegating to SUBSTITUTE grants nothing over CAROL
    assert not can_manage_user(world.directory, MANAGER, CAROL).allowed


def test_require_can_manage_raises(world):
    with pytest.raises(ForbiddenError):
        require_can_manage(world.directory, OUTSIDER, ALICE)
    with pytest.raises(ResourceNotFoundError):
        require_can_manage(world.directory, 999, ALICE)
    with pytest.raises(ResourceNotFoundError):
        require_can_manage(world.directory, MANAGER, 999)

    assert require_can_manage(world.directory, MANAGER, ALICE).allowed
