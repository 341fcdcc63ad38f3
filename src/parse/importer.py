"""Source importer: folds parsed Java files into a structural model."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from model.structural import ModelBuilder
from parse.treesitter_java import JavaParseError, parse_java_file
from scan.files import find_java_files

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from model.structural import StructuralModel

logger = logging.getLogger(__name__)


def _expand(paths: Iterable[Path | str]) -> Iterator[Path]:
    for path in paths:
        path = Path(path)
        if path.is_dir():
            yield from find_java_files(path)
        else:
            yield path


def import_sources(paths: Iterable[Path | str]) -> StructuralModel:
    """Parse Java sources and return the frozen structural model.

    Directories are expanded to the ``.java`` files below them. A file that
    cannot be read or parsed is logged and skipped; it never aborts the
    import.
    """
    builder = ModelBuilder()
    imported = 0
    skipped = 0

    for path in _expand(paths):
        try:
            unit = parse_java_file(path)
        except (OSError, UnicodeDecodeError, JavaParseError) as exc:
            logger.warning(f"Could not parse {path}: {exc}")
            skipped += 1
            continue

        builder.add_imports(unit.package, unit.imports)
        for class_unit in unit.classes:
            builder.add_class(class_unit)
        imported += 1

    model = builder.freeze()
    logger.debug(
        f"Imported {imported} files ({skipped} skipped): "
        f"{len(model.packages)} packages, {len(model)} classes"
    )
    return model


__all__ = ["import_sources"]
