"""Shared fixtures for the archive-sandbox tests."""

import shutil

import pytest

from archive_sandbox.service import ArchiveService
from tests.helpers import TESTDATA


@pytest.fixture
def workdir(tmp_path):
    """A private copy of the fixture archives to use as the sandbox root."""
    root = tmp_path / "work"
    shutil.copytree(TESTDATA, root)
    return root.resolve()


@pytest.fixture
def service(workdir):
    return ArchiveService(workdir)
