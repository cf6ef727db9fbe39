"""Constants and parameter lists shared by the test modules."""

from pathlib import Path

import pytest

TESTDATA = Path(__file__).parent / "testdata"

BAAR_CONTENT = "das Pferd isst Gurkensalat\n"

try:
    import libarchive  # noqa: F401

    LIBARCHIVE_AVAILABLE = True
except (ImportError, OSError):
    LIBARCHIVE_AVAILABLE = False

requires_libarchive = pytest.mark.skipif(
    not LIBARCHIVE_AVAILABLE, reason="libarchive-c or the libarchive shared library is not installed"
)

# (archive file, name of the directory entry, directory permissions, file permissions)
FORMATS = [
    pytest.param("test.cpio", "foo", "040755", "0100644", id="cpio", marks=requires_libarchive),
    pytest.param("test.tar.gz", "foo/", "-rwxr-xr-x", "-rw-r--r--", id="tar.gz"),
    pytest.param("test.tar.bz2", "foo/", "-rwxr-xr-x", "-rw-r--r--", id="tar.bz2"),
    pytest.param("test.tar.xz", "foo/", "-rwxr-xr-x", "-rw-r--r--", id="tar.xz"),
    pytest.param("test.zip", "foo/", "drwxr-xr-x", "-rw-r--r--", id="zip"),
]

ARCHIVES = [pytest.param(p.values[0], id=p.id, marks=p.marks) for p in FORMATS]
