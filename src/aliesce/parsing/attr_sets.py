"""
Centralized option attribute sets for aliesce.

The option merger walks these sets to combine the command-line namespace
with the namespace decoded from in-file directive lines.
"""
from __future__ import annotations
from typing import Set

# Options an in-file directive line may set.
_DIRECTIVE_ATTRS: Set[str] = {
    "path_dir",
    "list_only",
    "only",
}

_BOOL_ATTRS: Set[str] = {
    "list_only",
}

_STR_ATTRS: Set[str] = {
    "path_src",
    "path_dir",
    "only",
}

__all__ = [
    "_DIRECTIVE_ATTRS",
    "_BOOL_ATTRS",
    "_STR_ATTRS",
]
