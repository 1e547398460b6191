"""
subset – Parsing of '--only' subset expressions.

A subset expression is a comma-separated list of script numbers and/or
inclusive ranges, e.g. '1,3-5'. Syntax is checked as soon as the options
are merged; range against the registry size is checked once the registry
exists.
"""
import re
from typing import FrozenSet, Iterable, Optional, Set

from aliesce.core.errors import InvalidSubset

_NUM_RE = re.compile(r"^\d+$")


class SubsetSelector:
    @staticmethod
    def parse(expr: Optional[str]) -> Optional[FrozenSet[int]]:
        """Return the selected numbers, or None when every script is selected.

        >>> sorted(SubsetSelector.parse("1,3-5"))
        [1, 3, 4, 5]
        """
        if expr is None or not expr.strip():
            return None
        out: Set[int] = set()
        for tok in expr.split(","):
            tok = tok.strip()
            if "-" in tok:
                start_s, _, end_s = tok.partition("-")
                start_s, end_s = start_s.strip(), end_s.strip()
                if not (_NUM_RE.match(start_s) and _NUM_RE.match(end_s)):
                    raise InvalidSubset(f"invalid range {tok!r} in subset {expr!r}")
                start, end = int(start_s), int(end_s)
                if start > end:
                    raise InvalidSubset(f"inverted range {tok!r} in subset {expr!r}")
                out.update(range(start, end + 1))
            elif _NUM_RE.match(tok):
                out.add(int(tok))
            else:
                raise InvalidSubset(f"invalid script number {tok!r} in subset {expr!r}")
        return frozenset(out)

    @staticmethod
    def validate(numbers: Optional[Iterable[int]], size: int) -> None:
        """Ensure every number lies within 1..size."""
        if numbers is None:
            return
        bad = sorted(n for n in numbers if not 1 <= n <= size)
        if bad:
            listed = ", ".join(str(n) for n in bad)
            raise InvalidSubset(f"script number(s) {listed} out of range (source has {size} script(s))")
