"""Tests for id shortening and resolution."""

from types import SimpleNamespace

import pytest

from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.utils.uuid_utils import resolve_id, shorten_uuid

CANDIDATES = [
    SimpleNamespace(id="3f2a9c10-0000-4000-8000-000000000001", name="Work"),
    SimpleNamespace(id="3f2b0000-0000-4000-8000-000000000002", name="Home"),
    SimpleNamespace(id="a1b2c3d4-0000-4000-8000-000000000003", name="Errands"),
]


def test_shorten_uuid():
    assert shorten_uuid("3f2a9c10-0000-4000-8000-000000000001") == "3f2a9c10"
    assert shorten_uuid("abcdef", length=3) == "abc"


class TestResolveId:
    def test_full_id(self):
        full = CANDIDATES[0].id
        assert resolve_id(full, CANDIDATES, "project") == full

    def test_unique_prefix(self):
        assert resolve_id("a1b2", CANDIDATES, "project") == CANDIDATES[2].id

    def test_prefix_is_case_insensitive(self):
        assert resolve_id("A1B2", CANDIDATES, "project") == CANDIDATES[2].id

    def test_ambiguous_prefix(self):
        with pytest.raises(ValidationError, match="Ambiguous project"):
            resolve_id("3f2", CANDIDATES, "project")

    def test_not_found(self):
        with pytest.raises(NotFoundError, match="Project not found"):
            resolve_id("ffff", CANDIDATES, "project")

    def test_name_match_when_enabled(self):
        assert resolve_id("errands", CANDIDATES, "project", match_name=True) == CANDIDATES[2].id

    def test_name_ignored_by_default(self):
        with pytest.raises(NotFoundError):
            resolve_id("Errands", CANDIDATES, "task")

    def test_prefix_wins_over_name(self):
        candidates = [
            SimpleNamespace(id="abc12345", name="Other"),
            SimpleNamespace(id="ffff0000", name="abc"),
        ]
        assert resolve_id("abc", candidates, "project", match_name=True) == "abc12345"

    def test_empty_value(self):
        with pytest.raises(ValidationError):
            resolve_id("  ", CANDIDATES, "task")
