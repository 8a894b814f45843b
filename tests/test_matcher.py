import pytest

from js_check_deps.matcher import match_bad_rules

RULES = {
    "@acme/bad": ["1.0.*", "^1.1.2"],
    "evil-package": ["*"],
}


def test_matches_return_only_the_ranges_that_hit() -> None:
    assert match_bad_rules("@acme/bad", "1.0.5", RULES) == ["1.0.*"]
    assert match_bad_rules("@acme/bad", "1.1.3", RULES) == ["^1.1.2"]
    assert match_bad_rules("@acme/bad", "2.0.0", RULES) is None


def test_wildcard_rule_matches_any_version() -> None:
    assert match_bad_rules("evil-package", "9.9.9", RULES) == ["*"]
    assert match_bad_rules("evil-package", "not-a-version", RULES) == ["*"]


@pytest.mark.parametrize("version", ["1.0.0", "not-a-version", "", None, 5])
def test_unknown_package_never_matches(version: object) -> None:
    assert match_bad_rules("left-pad", version, RULES) is None


@pytest.mark.parametrize("version", ["", None, 5, ["1.0.0"]])
def test_non_string_or_empty_versions_are_skipped(version: object) -> None:
    assert match_bad_rules("evil-package", version, RULES) is None


def test_empty_pattern_list_is_treated_as_absent() -> None:
    assert match_bad_rules("ghost", "1.0.0", {"ghost": []}) is None


def test_non_string_name_never_matches() -> None:
    assert match_bad_rules(["evil-package"], "1.0.0", RULES) is None


def test_uncoercible_version_without_wildcard_is_not_a_match() -> None:
    assert match_bad_rules("@acme/bad", "github:acme/bad", RULES) is None


def test_uncoercible_version_with_padded_wildcard() -> None:
    rules = {"pkg": ["^1.0.0", " * "]}
    assert match_bad_rules("pkg", "latest", rules) == ["*"]


def test_all_matching_ranges_are_returned_in_rule_order() -> None:
    rules = {"pkg": [" ^1.0.0", "*", "2.x", "1.2.*"]}
    assert match_bad_rules("pkg", "1.2.0", rules) == [" ^1.0.0", "*", "1.2.*"]


def test_prerelease_versions_are_coerced_before_matching() -> None:
    assert match_bad_rules("@acme/bad", "1.1.2-beta.1", RULES) == ["^1.1.2"]


def test_invalid_ranges_are_ignored() -> None:
    rules = {"pkg": ["garbage!!", "1.x"]}
    assert match_bad_rules("pkg", "1.0.0", rules) == ["1.x"]


def test_duplicate_ranges_are_reported_twice() -> None:
    rules = {"pkg": ["1.x", "1.x"]}
    assert match_bad_rules("pkg", "1.4.0", rules) == ["1.x", "1.x"]
