"""Builders for index snapshots and wheel archives used across tests."""

import zipfile

from resolution.models import IndexMetadata, ReleaseDescriptor


def release(filename, python_version, url=None, size=0, requires_python=None, sha256=None):
    """Build a ReleaseDescriptor with a URL derived from the filename."""
    return ReleaseDescriptor(
        filename=filename,
        python_version=python_version,
        url=url or f"https://files.example.org/{filename}",
        size=size,
        requires_python=requires_python,
        sha256=sha256,
    )


def index(name, releases):
    """Build IndexMetadata from {version: [ReleaseDescriptor, ...]}."""
    return IndexMetadata(name=name, releases={v: tuple(r) for v, r in releases.items()})


def write_wheel(path, name, version, files=None, extra_entries=None):
    """Write a minimal wheel with a RECORD covering every file.

    Args:
        path: destination of the archive.
        name: distribution name as it appears in the dist-info directory.
        version: distribution version.
        files: {relative path: text} of payload files.
        extra_entries: {archive name: text} written verbatim, not recorded.
    """
    files = dict(files or {name.lower(): ""})
    payload = {}
    for rel, text in files.items():
        if rel.endswith(".py") or "/" in rel:
            payload[rel] = text
        else:
            payload[f"{rel}/__init__.py"] = text
    dist_info = f"{name}-{version}.dist-info"
    payload[f"{dist_info}/METADATA"] = f"Metadata-Version: 2.1\nName: {name}\nVersion: {version}\n"
    payload[f"{dist_info}/WHEEL"] = "Wheel-Version: 1.0\nRoot-Is-Purelib: true\n"
    record_lines = [f"{rel},," for rel in payload] + [f"{dist_info}/RECORD,,"]
    payload[f"{dist_info}/RECORD"] = "\n".join(record_lines) + "\n"

    with zipfile.ZipFile(path, "w") as bundle:
        for rel, text in payload.items():
            bundle.writestr(rel, text)
        for rel, text in (extra_entries or {}).items():
            bundle.writestr(rel, text)
    return path
