"""Python language support, built on :mod:`ast`.

Files that fail to parse are reported as handled with no result rather
than falling through to another plugin.
"""

from __future__ import annotations

import ast
import logging
from pathlib import PurePosixPath

import pluggy

hookimpl = pluggy.HookimplMarker("semmap")

logger = logging.getLogger(__name__)


def _parse(rel_path: str, content: str) -> ast.Module | None:
    try:
        return ast.parse(content)
    except (SyntaxError, ValueError):
        logger.debug("Could not parse %s as Python", rel_path)
        return None


class PythonPlugin:
    """Reads Python modules."""

    @hookimpl
    def extract_exports(self, rel_path: str, content: str) -> list[str] | None:
        if not rel_path.endswith(".py"):
            return None
        tree = _parse(rel_path, content)
        if tree is None:
            return []
        declared = _dunder_all(tree)
        if declared is not None:
            return declared
        return [
            node.name
            for node in tree.body
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))
            and not node.name.startswith("_")
        ]

    @hookimpl
    def extract_summary(self, rel_path: str, content: str) -> str | None:
        if not rel_path.endswith(".py"):
            return None
        tree = _parse(rel_path, content)
        if tree is None:
            return None
        doc = ast.get_docstring(tree)
        return doc.strip() if doc and doc.strip() else None

    @hookimpl
    def extract_imports(self, rel_path: str, content: str) -> list[str] | None:
        if not rel_path.endswith(".py"):
            return None
        tree = _parse(rel_path, content)
        if tree is None:
            return []

        package = PurePosixPath(rel_path).parent
        targets: list[str] = []
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    targets.extend(_absolute_candidates(alias.name))
            elif isinstance(node, ast.ImportFrom):
                names = [alias.name for alias in node.names if alias.name != "*"]
                if node.level:
                    base = package
                    for _ in range(node.level - 1):
                        base = base.parent
                    targets.extend(_relative_candidates(base, node.module, names))
                elif node.module:
                    targets.extend(_absolute_candidates(node.module))
                    for name in names:
                        targets.extend(_absolute_candidates(f"{node.module}.{name}"))
        return targets


def _dunder_all(tree: ast.Module) -> list[str] | None:
    for node in tree.body:
        if not isinstance(node, ast.Assign):
            continue
        if not any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets):
            continue
        if isinstance(node.value, (ast.List, ast.Tuple)):
            return [
                elt.value
                for elt in node.value.elts
                if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
            ]
    return None


def _module_files(base: str) -> tuple[str, str]:
    return f"{base}.py", f"{base}/__init__.py"


def _absolute_candidates(dotted: str) -> list[str]:
    base = dotted.replace(".", "/")
    return [*_module_files(base), *_module_files(f"src/{base}")]


def _relative_candidates(
    package: PurePosixPath, module: str | None, names: list[str]
) -> list[str]:
    prefix = "" if str(package) == "." else f"{package}/"
    if module:
        base = prefix + module.replace(".", "/")
        return [*_module_files(base), *(f"{base}/{name}.py" for name in names)]
    return [f"{prefix}{name}.py" for name in names]
