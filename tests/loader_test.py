from __future__ import annotations

from pathlib import Path

import pytest

from fixtory import DirectoryNotFound
from fixtory.bases import Fixtory

DEFINITION = """
factory.define("{name}", {{"title": "{title}"}})
"""


@pytest.fixture(name="factories")
def factories_fixture(tmp_path: Path) -> Path:
    (tmp_path / "nested").mkdir()
    (tmp_path / "books.py").write_text(DEFINITION.format(name="types.SimpleNamespace", title="Dune"))
    (tmp_path / "nested" / "novels.py").write_text(DEFINITION.format(name="novel:types.SimpleNamespace", title="Emma"))
    (tmp_path / "notes.txt").write_text("not python")
    return tmp_path


def test_load_factories(fx: Fixtory, factories: Path) -> None:
    assert fx.load_factories(factories) is fx
    assert set(fx.definitions) == {"types.SimpleNamespace", "novel:types.SimpleNamespace"}
    assert fx.instance("types.SimpleNamespace").title == "Dune"
    assert fx.instance("novel:types.SimpleNamespace").title == "Emma"


def test_load_many(fx: Fixtory, factories: Path) -> None:
    fx.load_factories([str(factories / "nested")])
    assert set(fx.definitions) == {"novel:types.SimpleNamespace"}


def test_directory_not_found(fx: Fixtory, tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFound) as excinfo:
        fx.load_factories(tmp_path / "nonexistent")
    assert excinfo.value.path == str(tmp_path / "nonexistent")
    assert not fx.definitions


def test_stops_at_missing_directory(fx: Fixtory, factories: Path) -> None:
    with pytest.raises(DirectoryNotFound):
        fx.load_factories([factories / "nested", factories / "books.py"])
    assert set(fx.definitions) == {"novel:types.SimpleNamespace"}
