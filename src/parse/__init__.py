"""Java source parsing for layerguard."""

from parse.importer import import_sources
from parse.treesitter_java import (
    CompilationUnit,
    JavaParseError,
    parse_java_file,
    parse_java_source,
)

__all__ = [
    "CompilationUnit",
    "JavaParseError",
    "import_sources",
    "parse_java_file",
    "parse_java_source",
]
