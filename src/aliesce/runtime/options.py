from __future__ import annotations

import argparse
from dataclasses import fields, replace
from typing import Any, Dict, Optional

from aliesce.core.interfaces.logging import LoggerLikeProtocol
from aliesce.core.models import Settings
from aliesce.logging.helpers import get_logger
from aliesce.parsing.attr_sets import _BOOL_ATTRS, _DIRECTIVE_ATTRS, _STR_ATTRS


class OptionMerger:
    """Merge command-line and in-file options into one `Settings`.

    Precedence, per option and independently of the others:
    in-file value, else command-line value, else the built-in default.
    """

    def __init__(self, *, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._log = logger or get_logger("options")

    @staticmethod
    def _is_set(key: str, val: Any) -> bool:
        if key in _BOOL_ATTRS:
            return val is not None
        if key in _STR_ATTRS:
            return val not in (None, "")
        return val is not None

    def merge(
        self,
        cli: Optional[argparse.Namespace],
        infile: Optional[argparse.Namespace] = None,
        *,
        base: Optional[Settings] = None,
    ) -> Settings:
        settings = base or Settings()
        known = {f.name for f in fields(Settings)}
        cli_vals = vars(cli) if cli is not None else {}
        file_vals = vars(infile) if infile is not None else {}

        updates: Dict[str, Any] = {}
        for key in known & (_BOOL_ATTRS | _STR_ATTRS):
            file_val = file_vals.get(key) if key in _DIRECTIVE_ATTRS else None
            if self._is_set(key, file_val):
                updates[key] = file_val
                if self._is_set(key, cli_vals.get(key)) and cli_vals.get(key) != file_val:
                    self._log.debug("in-file %s=%r overrides command line %r", key, file_val, cli_vals.get(key))
            elif self._is_set(key, cli_vals.get(key)):
                updates[key] = cli_vals[key]
        return replace(settings, **updates)
