"""Tests for version ordering."""

import itertools

import pytest

from versioning.compare import is_newer, numeric_parts, pick_newest


class TestNumericParts:
    """Splitting versions into numeric components."""

    def test_splits_on_any_non_digit_run(self):
        assert numeric_parts("v1.2.3-beta.4") == [1, 2, 3, 4]

    def test_empty_and_none(self):
        assert numeric_parts("") == []
        assert numeric_parts(None) == []

    def test_non_ascii_digits_are_separators(self):
        assert numeric_parts("١٢٣") == []
        assert numeric_parts("1.²") == [1]


class TestIsNewer:
    """Component-wise comparison."""

    @pytest.mark.parametrize("installed,candidate", [
        ("1.0.0", "1.0.1"),
        ("1.0.0", "2.0.0"),
        ("1.9.0", "1.10.0"),
        ("1.0", "1.0.1"),
        ("v24.0.0", "25.0.0"),
        ("", "0.0.1"),
    ])
    def test_newer(self, installed, candidate):
        assert is_newer(installed, candidate) is True

    @pytest.mark.parametrize("installed,candidate", [
        ("1.0.1", "1.0.0"),
        ("1.0.0", "1.0.0"),
        ("1.0", "1.0.0"),
        ("1.0.0", "1.0"),
        ("installed", "latest"),
        ("", ""),
        (None, None),
    ])
    def test_not_newer(self, installed, candidate):
        assert is_newer(installed, candidate) is False

    def test_irreflexive_and_asymmetric(self):
        versions = ["0.1", "1.0.0", "1.2", "1.10.0", "2", "2.0.1", "10.0"]
        for v in versions:
            assert not is_newer(v, v)
        for a, b in itertools.permutations(versions, 2):
            assert not (is_newer(a, b) and is_newer(b, a))

    def test_transitive(self):
        versions = ["0.9", "1.0.0", "1.0.5", "1.2", "1.10.0", "2.0.1"]
        for a, b, c in itertools.permutations(versions, 3):
            if is_newer(a, b) and is_newer(b, c):
                assert is_newer(a, c)

    def test_never_raises_on_odd_input(self):
        for value in ["", "...", "🙂", "٣.٤", "99999999999999999999999.1", "-1", None]:
            is_newer(value, "1.0")
            is_newer("1.0", value)


class TestPickNewest:
    """Max-reduction with first-seen tie breaking."""

    def test_picks_highest(self):
        assert pick_newest(["1.0", "1.10", "1.9"]) == "1.10"

    def test_keeps_first_on_tie(self):
        items = [("brew", "2.0"), ("apt", "2.0.0")]
        assert pick_newest(items, key=lambda item: item[1]) == ("brew", "2.0")

    def test_empty(self):
        assert pick_newest([]) is None
