#!/usr/bin/env python3
"""
Tests for the staff roster.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import pytest

from core.backends import MemoryCollection
from core.exceptions import AuthorizationError, ValidationError
from core.staff import StaffRegistry
from models.constants import UNKNOWN_STAFF_COLOR
from models.data_models import Actor, Role

ADMIN = Actor(uid="anon-admin", role=Role.ADMIN)
STAFF = Actor(uid="anon-staff", role=Role.STAFF)

def seeded_registry() -> StaffRegistry:
    registry = StaffRegistry(MemoryCollection("staff"))
    registry.seed_defaults()
    return registry

def test_seed_defaults_once():
    registry = StaffRegistry(MemoryCollection("staff"))
    assert registry.seed_defaults() is True
    assert registry.seed_defaults() is False

    members = registry.members()
    assert len(members) == 4
    assert {m.id for m in members} == {"1", "2", "3", "4"}
    assert registry.name_of("1") == "田中 花子"

def test_members_ordered_by_name():
    names = [m.name for m in seeded_registry().members()]
    assert names == sorted(names)

def test_add_assigns_next_unused_color():
    registry = seeded_registry()
    member = registry.add("  高橋 由美  ", ADMIN)
    assert member.name == "高橋 由美"
    assert member.color == "#8B5CF6"
    assert registry.get(member.id) == member

def test_add_with_explicit_color():
    member = seeded_registry().add("伊藤 健", ADMIN, color="#14B8A6")
    assert member.color == "#14B8A6"

def test_add_requires_name():
    registry = seeded_registry()
    with pytest.raises(ValidationError):
        registry.add("   ", ADMIN)
    assert len(registry.members()) == 4

def test_staff_actor_cannot_manage_roster():
    registry = seeded_registry()
    with pytest.raises(AuthorizationError):
        registry.add("高橋 由美", STAFF)
    with pytest.raises(AuthorizationError):
        registry.rename("1", "田中 花", STAFF)
    with pytest.raises(AuthorizationError):
        registry.remove("1", STAFF)

def test_rename():
    registry = seeded_registry()
    renamed = registry.rename("2", "佐藤 次郎", ADMIN)
    assert renamed.name == "佐藤 次郎"
    assert registry.name_of("2") == "佐藤 次郎"
    assert registry.color_of("2") == "#10B981"

def test_rename_unknown_staff():
    with pytest.raises(ValidationError):
        seeded_registry().rename("missing", "名前", ADMIN)

def test_remove_staff():
    registry = seeded_registry()
    registry.remove("4", ADMIN)
    assert registry.get("4") is None
    assert registry.name_of("4") == ""
    assert registry.color_of("4") == UNKNOWN_STAFF_COLOR
    assert len(registry.members()) == 3
