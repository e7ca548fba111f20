"""Tests for the versioning module."""

import pytest

from patch_cascade.versioning.arithmetic import (
    MalformedVersionError,
    bump_patch,
    increment_patch,
    normalize_version,
    parse_version,
)


class TestParse:
    def test_parse_release(self):
        v = parse_version("1.4.2")
        assert (v.major, v.minor, v.patch) == (1, 4, 2)
        assert v.prerelease == ()

    def test_parse_prerelease(self):
        v = parse_version("2.0.0-rtm-1042")
        assert v.prerelease == ("rtm-1042",)

    def test_prerelease_precedes_release(self):
        assert parse_version("2.0.0-preview1") < parse_version("2.0.0")

    @pytest.mark.parametrize("text", ["", "1.2", "v1.2.3", "1.2.3.4", "banana"])
    def test_malformed_raises(self, text):
        with pytest.raises(MalformedVersionError) as exc_info:
            parse_version(text)
        assert exc_info.value.text == text

    def test_non_string_raises(self):
        with pytest.raises(MalformedVersionError):
            parse_version(None)

    def test_malformed_is_value_error(self):
        assert issubclass(MalformedVersionError, ValueError)


class TestIncrementPatch:
    @pytest.mark.parametrize("text", [
        "0.0.0", "1.4.2", "2.1.9", "10.20.30-beta.2", "1.0.0-rtm-1042",
    ])
    def test_keeps_major_minor_prerelease(self, text):
        v = parse_version(text)
        bumped = increment_patch(v)
        assert bumped.major == v.major
        assert bumped.minor == v.minor
        assert bumped.patch == v.patch + 1
        assert bumped.prerelease == v.prerelease

    def test_does_not_mutate_input(self):
        v = parse_version("1.4.2")
        increment_patch(v)
        assert str(v) == "1.4.2"

    def test_drops_build_metadata(self):
        assert str(increment_patch(parse_version("1.4.2+sha.abc"))) == "1.4.3"

    def test_bump_patch(self):
        assert bump_patch("1.4.2") == "1.4.3"
        assert bump_patch("2.0.0-rc1") == "2.0.1-rc1"

    def test_normalize_version(self):
        assert normalize_version(" 1.2.3+build.7 ") == "1.2.3"
