"""Tests for wheel filename parsing."""

import pytest

from resolution.artifact_name import is_wheel_filename, parse_artifact_name
from resolution.errors import ArtifactNameError, ParseFailure


class TestParseArtifactName:
    """Well-formed wheel names split into their segments."""

    def test_five_segment_name(self):
        info = parse_artifact_name("pkg-1.0-cp310-cp310-win_amd64.whl")
        assert info.distribution == "pkg"
        assert info.version == "1.0"
        assert info.build is None
        assert info.python_tag == "cp310"
        assert info.abi_tag == "cp310"
        assert info.platform_tag == "win_amd64"

    def test_numeric_build_tag(self):
        info = parse_artifact_name("pkg-2.3.1-12-py3-none-any.whl")
        assert info.version == "2.3.1"
        assert info.build == "12"
        assert info.python_tag == "py3"
        assert info.abi_tag == "none"
        assert info.platform_tag == "any"

    def test_compressed_platform_tag_set(self):
        info = parse_artifact_name(
            "numpy-1.26.0-cp310-cp310-manylinux_2_17_x86_64.manylinux2014_x86_64.whl"
        )
        assert info.platform_tag == "manylinux_2_17_x86_64.manylinux2014_x86_64"
        assert info.platform_tags == ("manylinux_2_17_x86_64", "manylinux2014_x86_64")

    def test_single_platform_tag_expands_to_itself(self):
        info = parse_artifact_name("pkg-1.0-py3-none-any.whl")
        assert info.platform_tags == ("any",)

    @pytest.mark.parametrize(
        "filename",
        [
            "pkg-1.0-cp310-cp310-win_amd64.whl",
            "Some_Package-0.10.2-1-cp39-abi3-macosx_11_0_arm64.whl",
            "pkg-1.0.post1-py2.py3-none-any.whl",
        ],
    )
    def test_segments_reconstruct_filename(self, filename):
        assert parse_artifact_name(filename).filename == filename


class TestParseArtifactNameFailures:
    """Malformed names fail outright; nothing is half-populated."""

    @pytest.mark.parametrize(
        "filename",
        [
            "",
            "pkg-1.0-cp310-cp310.whl",
            "pkg-1.0-cp310-cp310-win_amd64.zip",
            "pkg-1.0.tar.gz",
            "pkg-1.0-beta-py3-none-any.whl",
            "pkg-1.0-1-2-py3-none-any.whl",
            "pkg--cp310-cp310-win_amd64.whl",
            "pkg-1.0-cp310-cp310-.whl",
        ],
    )
    def test_rejected(self, filename):
        with pytest.raises(ArtifactNameError):
            parse_artifact_name(filename)

    def test_error_is_a_parse_failure(self):
        with pytest.raises(ParseFailure):
            parse_artifact_name("not-a-wheel")


def test_is_wheel_filename():
    """Only the binary archive extension counts."""
    assert is_wheel_filename("pkg-1.0-py3-none-any.whl") is True
    assert is_wheel_filename("pkg-1.0.tar.gz") is False
    assert is_wheel_filename("pkg-1.0.zip") is False
