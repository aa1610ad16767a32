"""Tests for the PyPI JSON API client."""

from unittest.mock import patch

import pytest

from registry.pypi.client import (
    PackageNotFoundError,
    RegistryError,
    fetch_index_metadata,
    index_url_for,
    parse_index_metadata,
)


def _file(filename, python_version="py3", **extra):
    entry = {
        "filename": filename,
        "python_version": python_version,
        "url": f"https://files.example.org/{filename}",
        "size": 123,
        "digests": {"sha256": "ab" * 32},
    }
    entry.update(extra)
    return entry


DOCUMENT = {
    "info": {"name": "Flask-RESTful"},
    "releases": {
        "0.3.9": [
            _file("Flask_RESTful-0.3.9-py2.py3-none-any.whl", "py2.py3", requires_python=">=3.7"),
            _file("Flask-RESTful-0.3.9.tar.gz", "source", requires_python=None),
        ],
        "0.3.8": [],
    },
}


class TestIndexUrl:
    def test_name_is_normalized(self):
        assert index_url_for("Flask_RESTful") == "https://pypi.org/pypi/flask-restful/json"

    def test_custom_base_without_slash(self):
        assert index_url_for("pkg", "https://mirror.local/pypi") == "https://mirror.local/pypi/pkg/json"


class TestParseIndexMetadata:
    """Deserialization keeps file order and drops unusable entries."""

    def test_releases_in_order(self):
        meta = parse_index_metadata(DOCUMENT, "flask-restful")
        assert meta.name == "Flask-RESTful"
        files = meta.releases["0.3.9"]
        assert [f.filename for f in files] == [
            "Flask_RESTful-0.3.9-py2.py3-none-any.whl",
            "Flask-RESTful-0.3.9.tar.gz",
        ]
        assert files[0].python_version == "py2.py3"
        assert files[0].requires_python == ">=3.7"
        assert files[0].size == 123
        assert files[0].sha256 == "ab" * 32
        assert files[1].requires_python is None
        assert meta.releases["0.3.8"] == ()

    def test_malformed_entries_dropped(self):
        document = {
            "info": {"name": "pkg"},
            "releases": {"1.0": [{"filename": "pkg-1.0-py3-none-any.whl"}, "junk", _file("pkg-1.0.tar.gz")]},
        }
        meta = parse_index_metadata(document)
        assert [f.filename for f in meta.releases["1.0"]] == ["pkg-1.0.tar.gz"]

    def test_missing_size_defaults_to_zero(self):
        document = {"info": {"name": "pkg"}, "releases": {"1.0": [_file("a.whl", size=None)]}}
        assert parse_index_metadata(document).releases["1.0"][0].size == 0

    @pytest.mark.parametrize("document", [[], {"info": {}}, {"releases": {}}, {"info": "x", "releases": {}}])
    def test_wrong_shape(self, document):
        with pytest.raises(RegistryError):
            parse_index_metadata(document, "pkg")


class TestFetchIndexMetadata:
    """HTTP outcomes map onto distinct errors."""

    def test_success(self):
        with patch("registry.pypi.client.get_json", return_value=(200, {}, DOCUMENT)) as mock_get:
            meta = fetch_index_metadata("Flask_RESTful")
        assert mock_get.call_args[0][0] == "https://pypi.org/pypi/flask-restful/json"
        assert meta.versions()
        assert "0.3.9" in meta.releases

    def test_not_found(self):
        with patch("registry.pypi.client.get_json", return_value=(404, {}, None)):
            with pytest.raises(PackageNotFoundError) as exc:
                fetch_index_metadata("nope")
        assert exc.value.package == "nope"

    @pytest.mark.parametrize("status", [0, 500, 403])
    def test_other_failures(self, status):
        with patch("registry.pypi.client.get_json", return_value=(status, {}, None)):
            with pytest.raises(RegistryError) as exc:
                fetch_index_metadata("pkg")
        assert not isinstance(exc.value, PackageNotFoundError)

    def test_undecodable_body(self):
        with patch("registry.pypi.client.get_json", return_value=(200, {}, None)):
            with pytest.raises(RegistryError):
                fetch_index_metadata("pkg")
