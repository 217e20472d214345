"""Unit tests for authorization/authorizer.py — authorize and candidate_paths."""
from __future__ import annotations

import pytest

from permission_tree.authorization.authorizer import (
    INVALID_REQUEST_ERROR,
    NO_AUTHORIZATION_MESSAGE,
    AuthorizationResult,
    authorize,
    candidate_paths,
)
from permission_tree.tree.builder import PermissionTree, parse_permissions


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def projects_tree() -> PermissionTree:
    return parse_permissions(
        [
            [
                "access@projects",
                "-access@projects:projectid",
                "+access@projects:projectid:prototype",
            ]
        ]
    )


def _explain(tree: PermissionTree, requested: str) -> AuthorizationResult:
    result = authorize(tree, requested, verbose=True)
    assert isinstance(result, AuthorizationResult)
    return result


# ---------------------------------------------------------------------------
# candidate_paths
# ---------------------------------------------------------------------------


class TestCandidatePaths:
    def test_no_segments(self) -> None:
        assert list(candidate_paths([])) == [""]

    def test_single_segment(self) -> None:
        assert list(candidate_paths(["a"])) == ["a", "", ""]

    def test_two_segments(self) -> None:
        assert list(candidate_paths(["a", "b"])) == ["a:b", "a", ":b", "a", "", ""]

    def test_three_segments(self) -> None:
        assert list(candidate_paths(["a", "b", "c"])) == [
            "a:b:c",
            "a:b",
            "a::c",
            ":b:c",
            "a:b",
            "a",
            ":b",
            "a",
            "",
            "",
        ]

    def test_most_specific_first_and_root_last(self) -> None:
        paths = list(candidate_paths(["w", "x", "y", "z"]))
        assert paths[0] == "w:x:y:z"
        assert paths[-1] == ""

    def test_is_lazy(self) -> None:
        paths = candidate_paths(["a", "b"])
        assert next(paths) == "a:b"

    def test_accepts_tuple(self) -> None:
        assert list(candidate_paths(("a",))) == ["a", "", ""]


# ---------------------------------------------------------------------------
# Specificity
# ---------------------------------------------------------------------------


class TestSpecificity:
    def test_more_specific_grant_beats_deny(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects:projectid:prototype:123") is True

    def test_specific_deny_beats_general_grant(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects:projectid") is False

    def test_deny_covers_children(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects:projectid:other") is False

    def test_general_grant_applies_to_siblings(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects:projectid2") is True

    def test_app_level_request(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects") is True

    def test_unrelated_permission_not_authorized(self, projects_tree: PermissionTree) -> None:
        result = _explain(projects_tree, "delete@projects:projectid2")
        assert result.authorized is False
        assert result.message == NO_AUTHORIZATION_MESSAGE

    def test_empty_segment_matches_any_value(self) -> None:
        tree = parse_permissions([["read@projects::files"]])
        assert authorize(tree, "read@projects:42:files") is True
        assert authorize(tree, "read@projects:42:other") is False

    def test_trailing_empty_segment_match(self) -> None:
        tree = parse_permissions([["-read@projects::files", "read@projects:42"]])
        assert authorize(tree, "read@projects:42:files") is True

    def test_non_matching_entry_does_not_stop_search(self) -> None:
        tree = parse_permissions([["read@docs", "write@docs:x"]])
        assert authorize(tree, "read@docs:x") is True

    def test_requested_action_prefix_is_ignored(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "-access@projects:projectid2") is True
        assert authorize(projects_tree, "+access@projects:projectid") is False


# ---------------------------------------------------------------------------
# Precedence inside one entry
# ---------------------------------------------------------------------------


class TestEntryPrecedence:
    def test_exact_deny_beats_exact_grant_from_other_block(self) -> None:
        tree = parse_permissions([["read@docs"], ["-read@docs"]])
        assert authorize(tree, "read@docs") is False

    def test_wildcard_deny_beats_exact_grant(self) -> None:
        tree = parse_permissions([["read@docs", "-*@docs"]])
        result = _explain(tree, "read@docs")
        assert result.authorized is False
        assert result.message == "The permission -*@docs blocks access"

    def test_exact_deny_reported_before_wildcard_deny(self) -> None:
        tree = parse_permissions([["-read@docs", "-*@docs"]])
        assert _explain(tree, "read@docs").message == "The permission -read@docs blocks access"

    def test_exact_grant_beats_wildcard_grant(self) -> None:
        tree = parse_permissions([["*@docs", "read@docs"]])
        assert _explain(tree, "read@docs").message == "The permission +read@docs grants access"

    def test_wildcard_grant(self) -> None:
        tree = parse_permissions([["*@docs:x"]])
        result = _explain(tree, "anything@docs:x:y")
        assert result.authorized is True
        assert result.message == "The permission +*@docs:x grants access"

    def test_specific_wildcard_deny_beats_general_exact_grant(self) -> None:
        tree = parse_permissions([["read@docs", "-*@docs:secret"]])
        assert authorize(tree, "read@docs:secret:1") is False

    def test_wildcard_request(self) -> None:
        tree = parse_permissions([["*@docs"]])
        assert authorize(tree, "*@docs:x") is True

    def test_host_built_tree_with_raw_sentinels(self) -> None:
        tree = {"docs": {"": {"read": "+"}, "secret": {"read": "-"}}}
        assert authorize(tree, "read@docs:public") is True
        assert authorize(tree, "read@docs:secret") is False


# ---------------------------------------------------------------------------
# Results and messages
# ---------------------------------------------------------------------------


class TestResults:
    def test_simple_mode_returns_bool(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@projects") is True
        assert authorize(projects_tree, "access@projects:projectid") is False

    def test_invalid_request_simple_mode(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "bad perm string!!") is False

    def test_invalid_request_verbose(self, projects_tree: PermissionTree) -> None:
        result = _explain(projects_tree, "bad perm string!!")
        assert result.ok is False
        assert result.authorized is False
        assert result.error == INVALID_REQUEST_ERROR
        assert result.message is None

    def test_missing_app(self, projects_tree: PermissionTree) -> None:
        result = _explain(projects_tree, "access@unknownapp")
        assert result.ok is True
        assert result.authorized is False
        assert result.message == "The user does not have access to the 'unknownapp' app"

    def test_missing_app_simple_mode(self, projects_tree: PermissionTree) -> None:
        assert authorize(projects_tree, "access@unknownapp") is False

    def test_empty_tree(self) -> None:
        assert authorize({}, "access@projects") is False

    def test_grant_message_names_statement(self, projects_tree: PermissionTree) -> None:
        result = _explain(projects_tree, "access@projects:projectid:prototype:123")
        assert result.message == "The permission +access@projects:projectid:prototype grants access"

    def test_deny_message_names_statement(self, projects_tree: PermissionTree) -> None:
        result = _explain(projects_tree, "access@projects:projectid")
        assert result.message == "The permission -access@projects:projectid blocks access"

    def test_result_is_truthy_when_authorized(self, projects_tree: PermissionTree) -> None:
        assert bool(_explain(projects_tree, "access@projects")) is True
        assert bool(_explain(projects_tree, "access@projects:projectid")) is False

    def test_to_dict_omits_unset_fields(self, projects_tree: PermissionTree) -> None:
        assert _explain(projects_tree, "access@projects").to_dict() == {
            "ok": True,
            "authorized": True,
            "message": "The permission +access@projects grants access",
        }
        assert _explain(projects_tree, "nope").to_dict() == {
            "ok": False,
            "authorized": False,
            "error": INVALID_REQUEST_ERROR,
        }

    def test_idempotent(self, projects_tree: PermissionTree) -> None:
        first = _explain(projects_tree, "access@projects:projectid:prototype")
        second = _explain(projects_tree, "access@projects:projectid:prototype")
        assert first == second

    def test_tree_not_mutated(self, projects_tree: PermissionTree) -> None:
        before = repr(projects_tree)
        authorize(projects_tree, "access@projects:projectid:prototype:1", verbose=True)
        authorize(projects_tree, "access@unknown")
        assert repr(projects_tree) == before
