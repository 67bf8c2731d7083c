"""
Utility helpers for gerbersockets.
"""

from __future__ import annotations

from pathlib import Path


def ensure_parent_dir(path: Path) -> Path:
    """
    Ensure the parent directory of a path exists.

    Args:
        path: The file path whose parent directory should be ensured.

    Returns:
        The original path, unchanged, so calls can be chained:
            ensure_parent_dir(output_path).write_bytes(data)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


__all__ = ["ensure_parent_dir"]
