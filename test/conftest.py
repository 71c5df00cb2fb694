"""
Pytest configuration for sqlitebench tests
"""

import shutil
import tempfile

import pytest

from sqlitebench import create_driver, get_available_drivers


@pytest.fixture(params=get_available_drivers())
def driver(request):
    """Every registered driver."""
    return create_driver(request.param)


@pytest.fixture
def temp_dir():
    """Create a temporary directory"""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)
