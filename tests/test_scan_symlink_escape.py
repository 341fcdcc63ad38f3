from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _build_gitignore_matcher, collect_java_sources, find_java_files

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str = "class X {}\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_java_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "pkg" / "Module.java")

    external_root = tmp_path / "external"
    _write(external_root / "Leak.java")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = [
        path.relative_to(repo_root).as_posix() for path in find_java_files(repo_root)
    ]

    assert "pkg/Module.java" in results
    assert "linked/Leak.java" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "pkg" / "Module.java")
    (repo_root / ".gitignore").write_text("*.class\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text(
        "pkg/Module.java\n", encoding="utf-8"
    )

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "Module.java")) is False


def test_find_java_files_is_sorted_and_filtered(tmp_path: Path) -> None:
    _write(tmp_path / "b" / "Beta.java")
    _write(tmp_path / "a" / "Alpha.java")
    _write(tmp_path / "a" / "notes.txt")
    _write(tmp_path / "gen" / "Generated.java")
    (tmp_path / ".gitignore").write_text("Generated.java\n", encoding="utf-8")

    results = [p.relative_to(tmp_path).as_posix() for p in find_java_files(tmp_path)]

    assert results == ["a/Alpha.java", "b/Beta.java"]


def test_find_java_files_include_and_exclude_patterns(tmp_path: Path) -> None:
    _write(tmp_path / "main" / "App.java")
    _write(tmp_path / "main" / "AppTest.java")
    _write(tmp_path / "other" / "Tool.java")

    results = [
        p.relative_to(tmp_path).as_posix()
        for p in find_java_files(
            tmp_path,
            include_patterns=["main/*"],
            exclude_patterns=["*Test.java"],
        )
    ]

    assert results == ["main/App.java"]


def test_collect_java_sources_skips_missing_dirs_and_duplicates(tmp_path: Path) -> None:
    _write(tmp_path / "src" / "main" / "java" / "com" / "app" / "App.java")

    results = collect_java_sources(
        tmp_path,
        ["src/main/java", "src/missing", "src/main/java"],
    )

    assert [p.name for p in results] == ["App.java"]
