from __future__ import annotations

import pytest

from match import glob_to_regex, matches, matches_all, matches_any


def test_recursive_suffix_matches_any_depth_below_prefix() -> None:
    pattern = "com.myapp.controller..*"

    assert matches(pattern, "com.myapp.controller.UserController")
    assert matches(pattern, "com.myapp.controller.v2.Admin")


def test_recursive_suffix_does_not_match_sibling_with_same_prefix() -> None:
    assert not matches("com.myapp.controller..*", "com.myapp.controllerX.Foo")
    assert not matches("com.myapp.controller..*", "com.myapp.controller")


def test_single_level_suffix_matches_direct_members_only() -> None:
    assert matches("com.myapp.*", "com.myapp.User")
    assert not matches("com.myapp.*", "com.myapp.service.User")
    assert not matches("com.myapp.*", "com.myappx.User")


def test_glob_question_mark_matches_exactly_one_non_dot_character() -> None:
    assert matches("com.myapp.?ser", "com.myapp.User")
    assert matches("com.myapp.Us?r", "com.myapp.Us3r")
    assert not matches("com.myapp.?ser", "com.myapp.Uuser")
    assert not matches("com?myapp.User", "com.myapp.User")


def test_glob_star_does_not_cross_dots() -> None:
    assert matches("com.*.User", "com.myapp.User")
    assert not matches("com.*.User", "com.myapp.domain.User")
    assert matches("com.myapp.*Service", "com.myapp.UserService")


def test_glob_bracket_expression_is_passed_through() -> None:
    assert matches("com.myapp.[UA]ser*", "com.myapp.UserService")
    assert not matches("com.myapp.[UA]ser*", "com.myapp.BserService")


def test_glob_escapes_regex_metacharacters() -> None:
    assert glob_to_regex("a+b.*") == r"^a\+b\.[^.]*$"
    assert not matches("a+b*", "aab")


def test_regex_patterns_are_detected_by_anchor() -> None:
    assert matches(r"^com\.myapp\..*Controller$", "com.myapp.web.UserController")
    assert matches("Repository$", "com.myapp.repository.UserRepository")
    assert not matches(r"^com\.other\.", "com.myapp.User")


def test_invalid_regex_degrades_to_exact_comparison() -> None:
    pattern = "^com.myapp.(unclosed"

    assert not matches(pattern, "com.myapp.unclosed")
    assert matches(pattern, pattern)


def test_plain_pattern_is_exact_match() -> None:
    assert matches("com.myapp.User", "com.myapp.User")
    assert not matches("com.myapp.User", "com.myapp.UserService")


@pytest.mark.parametrize("pattern", ["", "[", "..*", ".*", "^", "$", "?", "[a-"])
def test_malformed_patterns_never_raise(pattern: str) -> None:
    matches(pattern, "com.myapp.User")


def test_non_string_input_never_matches() -> None:
    assert matches(None, "com.myapp.User") is False  # type: ignore[arg-type]
    assert matches("com.myapp..*", None) is False  # type: ignore[arg-type]


def test_matches_any_and_all() -> None:
    patterns = ["com.myapp.service..*", "*Service"]

    assert matches_any(patterns, "com.myapp.other.AuditService") is False
    assert matches_any(["com.myapp..*", "org..*"], "org.example.Thing")
    assert matches_all(["com.myapp..*", "^.*Service$"], "com.myapp.UserService")
    assert not matches_all(["com.myapp..*", "^.*Service$"], "com.myapp.User")
    assert matches_any([], "com.myapp.User") is False
    assert matches_all([], "com.myapp.User") is True
