"""Path-prefix translation between a scan root and a map's own directory.

A semantic map may live in a different directory than the scan root (for
example a workspace-level ``SEMMAP.md`` describing ``crates/app``).  The
classifier reports paths relative to the scan root; the map stores them
relative to itself.  The prefix bridges the two namespaces.

All prefixes and paths use forward slashes.
"""

from __future__ import annotations

from pathlib import Path, PurePath


def _clean(raw: str) -> str:
    cleaned = raw.removeprefix("./").removeprefix(".\\")
    if cleaned in (".", ""):
        return ""
    return cleaned.replace("\\", "/").rstrip("/")


def build_root_prefix(root: PurePath | str) -> str:
    """Prefix derived from *root* alone (``"."`` and ``"./"`` yield ``""``).

    Examples:
        >>> build_root_prefix("./crates")
        'crates'
        >>> build_root_prefix(".")
        ''
    """
    return _clean(str(root) if isinstance(root, PurePath) else root)


def build_root_prefix_relative(map_dir: Path, root: Path) -> str:
    """Prefix of *root* relative to *map_dir*.

    Returns ``""`` when they coincide.  When *root* is not located under
    *map_dir* the prefix falls back to :func:`build_root_prefix`.
    """
    try:
        relative = root.relative_to(map_dir)
    except ValueError:
        try:
            relative = root.resolve().relative_to(map_dir.resolve())
        except ValueError:
            return build_root_prefix(root)
    return _clean(relative.as_posix())


def prefix_path(prefix: str, path: str) -> str:
    """Translate a scan-root-relative *path* into the map namespace."""
    if not prefix:
        return path
    return f"{prefix}/{path}"


def strip_prefix_for_lookup(prefix: str, path: str) -> str:
    """Translate a map-namespace *path* back to scan-root form.

    Paths that do not carry the prefix are returned unchanged.
    """
    if not prefix:
        return path
    return path.removeprefix(f"{prefix}/")
