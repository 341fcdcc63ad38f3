"""Source file discovery."""

from scan.files import collect_java_sources, find_java_files

__all__ = ["collect_java_sources", "find_java_files"]
