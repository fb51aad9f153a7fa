from pathlib import Path

import pytest

from varstore.components.resolver import VariableResolver


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "environment.json"


@pytest.fixture
def environ() -> dict:
    return {}


@pytest.fixture
def resolver(document_path: Path, environ: dict) -> VariableResolver:
    return VariableResolver.open(str(document_path), environ=environ)
