"""Scene file collector — gathers the asset files that make up a scene."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)


def collect_scene_files(
    root: str | Path,
    extensions: Iterable[str],
    excluded_dirs: Iterable[str] = (),
    on_file: Optional[Callable[[Path], None]] = None,
) -> list[Path]:
    """Return every scene asset under ``root`` in canonical order.

    Files are selected by exact suffix match. Directories whose name is in
    ``excluded_dirs`` are skipped entirely. The result is sorted component
    by component on the path relative to ``root``, so it never depends on
    traversal order and ``mesh/a.ply`` sorts before ``mesh-lod.ply``.
    """
    root = Path(root)
    wanted = set(extensions)
    skipped = set(excluded_dirs)
    files: list[Path] = []
    _walk(root, wanted, skipped, files, on_file)
    files.sort(key=lambda p: p.relative_to(root).parts)
    logger.debug("Collected %d scene files under %s", len(files), root)
    return files


def _walk(
    path: Path,
    wanted: set[str],
    skipped: set[str],
    files: list[Path],
    on_file: Optional[Callable[[Path], None]],
) -> None:
    # os.scandir raises OSError for unreadable directories; let it propagate
    with os.scandir(path) as entries:
        for entry in entries:
            entry_path = Path(entry.path)
            if entry.is_dir():
                if entry.name in skipped:
                    logger.debug("Skipping excluded directory %s", entry_path)
                    continue
                _walk(entry_path, wanted, skipped, files, on_file)
            elif entry.is_file() and entry_path.suffix in wanted:
                if on_file is not None:
                    on_file(entry_path)
                files.append(entry_path)
