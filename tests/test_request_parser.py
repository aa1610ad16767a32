"""Tests for install request parsing."""

import pytest

from resolution.errors import InvalidRequestError
from resolution.models import PackageRequest
from resolution.request import (
    load_requirements_file,
    normalize_name,
    parse_install_token,
    tokenize_rightmost_pin,
)


class TestNormalizeName:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Flask", "flask"),
            ("flask_restful", "flask-restful"),
            ("zope.interface", "zope-interface"),
            ("Foo__Bar--baz", "foo-bar-baz"),
            ("  padded  ", "padded"),
        ],
    )
    def test_pep503(self, raw, expected):
        assert normalize_name(raw) == expected


class TestTokenize:
    def test_bare_name(self):
        assert tokenize_rightmost_pin("requests") == ("requests", None)

    def test_pinned(self):
        assert tokenize_rightmost_pin(" requests == 2.31.0 ") == ("requests", "2.31.0")

    def test_rightmost_pin_wins(self):
        assert tokenize_rightmost_pin("a==1==2") == ("a==1", "2")


class TestParseInstallToken:
    """CLI tokens are either a bare name or an exact pin."""

    def test_bare_name(self):
        request = parse_install_token("numpy")
        assert request == PackageRequest(name="numpy", requested_version=None, raw_token="numpy")

    def test_exact_pin(self):
        request = parse_install_token("numpy==1.26")
        assert request.name == "numpy"
        assert request.requested_version == "1.26"
        assert request.raw_token == "numpy==1.26"

    @pytest.mark.parametrize(
        "token",
        ["", "==1.0", "numpy==", "numpy>=1.0", "numpy~=1.0", "numpy!=1.0", "a==1==2", "pkg @ https://x"],
    )
    def test_rejected(self, token):
        with pytest.raises(InvalidRequestError):
            parse_install_token(token)


class TestLoadRequirementsFile:
    """Requirements files accept the same two shapes as the CLI."""

    def test_pins_and_bare_names(self, tmp_path):
        path = tmp_path / "requirements.txt"
        path.write_text("# vendored deps\nrequests==2.31.0\n\nidna\n", encoding="utf-8")
        found = load_requirements_file(str(path))
        assert [(r.name, r.requested_version) for r in found] == [
            ("requests", "2.31.0"),
            ("idna", None),
        ]

    def test_range_specifier_rejected(self, tmp_path):
        path = tmp_path / "requirements.txt"
        path.write_text("requests>=2.0\n", encoding="utf-8")
        with pytest.raises(InvalidRequestError):
            load_requirements_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_requirements_file(str(tmp_path / "absent.txt"))
