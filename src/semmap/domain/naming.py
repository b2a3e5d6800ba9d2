"""Identifier expansion — turn a file stem into a readable sentence.

The leading word of a ``snake_case`` or ``camelCase`` identifier is
treated as a verb and mapped to a sentence pattern::

    get_user_profile  ->  "Gets the user profile."
    validateInput     ->  "Validates input."
    parser            ->  "Implements parser functionality."
"""

from __future__ import annotations

import re

_VERB_PATTERNS: dict[str, str] = {}


def _register(template: str, *verbs: str) -> None:
    for verb in verbs:
        _VERB_PATTERNS[verb] = template


_register("Gets the {rest}.", "get", "fetch", "load", "read", "retrieve")
_register("Sets the {rest}.", "set", "write", "save", "store")
_register("Updates {rest}.", "update", "sync", "refresh")
_register("Checks if {rest}.", "is", "has", "can", "should", "will")
_register("Creates {rest}.", "create", "new", "build", "make", "init")
_register("Removes {rest}.", "delete", "remove", "drop", "clear")
_register("Parses {rest}.", "parse", "extract", "decode")
_register("Validates {rest}.", "validate", "check", "verify")
_register("Formats {rest} for output.", "render", "format", "display", "print")
_register("Processes {rest}.", "handle", "process", "run", "exec")
_register("Converts {rest}.", "convert", "transform", "map")
_register("Finds {rest}.", "find", "search", "lookup", "query")
_register("Tests {rest}.", "test", "spec")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def split_identifier(name: str) -> list[str]:
    """Split a ``snake_case``, ``kebab-case`` or ``camelCase`` name into lowercase words."""
    if "_" in name or "-" in name:
        return [part.lower() for part in re.split(r"[_-]", name) if part]
    return [part.lower() for part in _CAMEL_BOUNDARY.split(name) if part]


def expand_identifier(name: str) -> str:
    """Expand *name* into a one-sentence description."""
    words = split_identifier(name)
    if not words:
        return f"Implements {name} functionality."

    verb, rest = words[0], " ".join(words[1:])
    template = _VERB_PATTERNS.get(verb)
    if template is not None and rest:
        return template.format(rest=rest)
    if not rest:
        return f"Implements {verb} functionality."
    return f"Implements {verb} {rest}."
