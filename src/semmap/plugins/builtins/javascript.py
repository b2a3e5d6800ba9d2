"""JavaScript / TypeScript language support.

Exports are names declared with ``export`` (``export default`` yields
``default``).  The summary is a leading ``/** ... */`` block.  Relative
``import``/``require`` specifiers resolve against the importing file's
directory, trying the bare path, ``.ts``, ``.js`` and ``index`` files.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import PurePosixPath

import pluggy

hookimpl = pluggy.HookimplMarker("semmap")

_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")
_RESOLVE_SUFFIXES = (".ts", ".js", "/index.ts", "/index.js")

_EXPORT_DECL = re.compile(
    r"^export\s+(?:declare\s+)?(?:async\s+)?"
    r"(?:function\*?|class|const|let|var|interface|type|enum|abstract\s+class)\s+([A-Za-z0-9_$]+)"
)
_EXPORT_DEFAULT = re.compile(r"^export\s+default\b")
_EXPORT_LIST = re.compile(r"^export\s*\{([^}]*)\}")
_IMPORT = re.compile(r"""(?:import|from)\s+['"](\.{1,2}/[^'"]+)['"]""")
_REQUIRE = re.compile(r"""require\(\s*['"](\.{1,2}/[^'"]+)['"]\s*\)""")
_BLOCK_DOC = re.compile(r"\A\s*/\*\*(.*?)\*/", re.DOTALL)


def _is_js(rel_path: str) -> bool:
    return rel_path.endswith(_EXTENSIONS)


class JavaScriptPlugin:
    """Scrapes JavaScript and TypeScript sources."""

    @hookimpl
    def extract_exports(self, rel_path: str, content: str) -> list[str] | None:
        if not _is_js(rel_path):
            return None
        names: list[str] = []
        for line in content.splitlines():
            stripped = line.strip()
            if match := _EXPORT_DECL.match(stripped):
                names.append(match.group(1))
            elif _EXPORT_DEFAULT.match(stripped):
                names.append("default")
            elif match := _EXPORT_LIST.match(stripped):
                for part in match.group(1).split(","):
                    name = part.split(" as ")[-1].strip()
                    if name:
                        names.append(name)
        return names

    @hookimpl
    def extract_summary(self, rel_path: str, content: str) -> str | None:
        if not _is_js(rel_path):
            return None
        match = _BLOCK_DOC.match(content)
        if match is None:
            return None
        lines = [line.strip().lstrip("*").strip() for line in match.group(1).splitlines()]
        text = " ".join(line for line in lines if line and not line.startswith("@"))
        return text or None

    @hookimpl
    def extract_imports(self, rel_path: str, content: str) -> list[str] | None:
        if not _is_js(rel_path):
            return None
        base = str(PurePosixPath(rel_path).parent)
        targets: list[str] = []
        for spec in [*_IMPORT.findall(content), *_REQUIRE.findall(content)]:
            resolved = posixpath.normpath(posixpath.join(base, spec))
            if PurePosixPath(resolved).suffix in _EXTENSIONS:
                targets.append(resolved)
            else:
                targets.extend(f"{resolved}{suffix}" for suffix in _RESOLVE_SUFFIXES)
        return targets
