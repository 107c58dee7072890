"""SourceFiles - Discovery of source documents on disk.

Input paths may name files or directories. Directories are searched
recursively for matching files; explicitly named files are taken as-is
when their suffix matches.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator


class SourceFiles:
    """Finds source documents under a set of paths."""

    def __init__(
        self,
        paths: tuple[Path, ...] | list[Path],
        suffix: str = ".json",
        accept: Callable[[Path], bool] | None = None,
        skip_dirs: list[str] | None = None,
    ) -> None:
        """Initialize file discovery.

        Args:
            paths: Files or directories to search.
            suffix: File suffix to match (case-insensitive).
            accept: Extra filter for files found inside directories.
            skip_dirs: Directory names to skip while walking.
        """
        self.paths = [Path(p) for p in paths]
        self.suffix = suffix.lower()
        self.accept = accept
        self.skip_dirs = skip_dirs or []

    def _should_skip(self, file_path: Path, base: Path) -> bool:
        """Check if a file sits under a skipped directory."""
        rel_path = file_path.relative_to(base)
        return any(part in self.skip_dirs for part in rel_path.parts[:-1])

    def iter_files(self) -> Iterator[Path]:
        """Yield matching files, each once, in a stable order."""
        seen: set[Path] = set()
        for path in self.paths:
            if path.is_file():
                candidates = [path] if path.suffix.lower() == self.suffix else []
            elif path.is_dir():
                candidates = [
                    file_path
                    for file_path in sorted(path.rglob(f"*{self.suffix}"))
                    if file_path.is_file()
                    and not self._should_skip(file_path, path)
                    and (self.accept is None or self.accept(file_path))
                ]
            else:
                candidates = []

            for file_path in candidates:
                resolved = file_path.resolve()
                if resolved not in seen:
                    seen.add(resolved)
                    yield file_path

    def find(self) -> list[Path]:
        """Return all matching files."""
        return list(self.iter_files())

    @staticmethod
    def read(file_path: Path) -> str:
        """Read a source document as UTF-8 text."""
        return file_path.read_text(encoding="utf-8")


__all__ = ["SourceFiles"]
