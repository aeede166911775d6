from pathlib import Path
from unittest import mock

import pytest

from formdata_builder import FormDataBuilder

pytest_plugins = ("pytester",)

BOUNDARY = "test-boundary"


@pytest.fixture
def form() -> FormDataBuilder:
    return FormDataBuilder(boundary=BOUNDARY)


@pytest.fixture
def mime_resolver() -> mock.Mock:
    return mock.Mock(return_value="application/x-test")


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    file_path = tmp_path / "report.bin"
    file_path.write_bytes(bytes(range(256)))
    return file_path
