import pytest

from library import Library
from utils.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # The CLI stores the output mode in the environment; reset it for every test
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def data_file(tmp_path):
    # A fresh data file for every test
    return str(tmp_path / "LibraryManagement.csv")


@pytest.fixture
def lib(data_file):
    return Library(data_file=data_file)
