"""Tests for the shared version-threshold predicate."""

import pytest
import semver

from sysagent_kernel.versioning.threshold import (
    InvalidVersion,
    is_below_threshold,
    parse_version,
    psp_enabled,
)

THRESHOLD = parse_version("1.25.0")


class TestParseVersion:
    def test_plain_version(self):
        assert parse_version("1.26.0") == semver.Version(1, 26, 0)

    def test_leading_v_and_build_metadata(self):
        v = parse_version("v1.25.3+rke2r1")
        assert (v.major, v.minor, v.patch) == (1, 25, 3)
        assert v.build == "rke2r1"

    def test_optional_minor_and_patch(self):
        assert parse_version("1.24") == semver.Version(1, 24, 0)

    @pytest.mark.parametrize("raw", ["", "   ", "bogus", "1.x.0", "v"])
    def test_malformed_raises(self, raw):
        with pytest.raises(InvalidVersion):
            parse_version(raw)

    def test_each_call_parses_afresh(self):
        first = parse_version("1.26.0")
        second = parse_version("1.26.0")
        assert first == second
        assert first is not second

    def test_invalid_version_is_value_error(self):
        with pytest.raises(ValueError) as exc:
            parse_version("not-a-version")
        assert "not-a-version" in str(exc.value)


class TestIsBelowThreshold:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1.24.9", True),
            ("v1.24.17+rke2r1", True),
            ("1.25.0-rc1", True),
            ("1.25.0", False),
            ("v1.25.0+k3s1", False),
            ("1.25.1", False),
            ("1.26.0", False),
            ("2.0.0", False),
        ],
    )
    def test_strictly_less_than(self, raw, expected):
        v = parse_version(raw)
        assert is_below_threshold(v, THRESHOLD) is expected
        assert is_below_threshold(v, THRESHOLD) == (v < THRESHOLD)

    def test_threshold_itself_is_not_below(self):
        assert is_below_threshold(THRESHOLD, THRESHOLD) is False

    def test_threshold_is_injectable(self):
        v = parse_version("1.25.0")
        assert is_below_threshold(v, parse_version("1.26.0")) is True


class TestPspEnabled:
    def test_enabled_below_threshold(self):
        assert psp_enabled("v1.24.8+rke2r1") is True

    def test_disabled_at_and_above_threshold(self):
        assert psp_enabled("1.25.0") is False
        assert psp_enabled("1.26.0") is False

    def test_custom_threshold(self):
        assert psp_enabled("1.25.4", threshold="1.26.0") is True

    def test_invalid_version_propagates(self):
        with pytest.raises(InvalidVersion):
            psp_enabled("garbage")
