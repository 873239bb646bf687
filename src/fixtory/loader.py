from __future__ import annotations

import logging
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator

from .errors import DirectoryNotFound

if TYPE_CHECKING:
    from .bases import Fixtory

logger = logging.getLogger(__name__)


def normalize_paths(paths: str | Path | Iterable[str | Path]) -> list[Path]:
    if isinstance(paths, (str, Path)):
        return [Path(paths)]
    return [Path(path) for path in paths]


def iter_definition_files(directory: Path) -> Iterator[Path]:
    yield from sorted(path for path in directory.rglob("*.py") if path.is_file())


def load_file(path: Path, factory: Fixtory) -> None:
    """Execute one definition file, exposing the engine as `factory`."""
    module_name = f"fixtory_definitions_{path.stem}_{abs(hash(path.resolve()))}"
    spec = spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load definitions from {path}")
    module = module_from_spec(spec)
    sys.modules[module_name] = module
    module.factory = factory  # type: ignore[attr-defined]
    spec.loader.exec_module(module)


def load_factories(paths: str | Path | Iterable[str | Path], factory: Fixtory) -> None:
    for path in normalize_paths(paths):
        if not path.is_dir():
            raise DirectoryNotFound(str(path))
        logger.debug("loading factories from %s", path)
        for file in iter_definition_files(path):
            logger.debug("loading factory file %s", file)
            load_file(file, factory)
