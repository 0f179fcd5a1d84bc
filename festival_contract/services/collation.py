"""
Locale-aware string comparison.

Ordering checks never use ambient str comparison or the process locale.
They go through a Collator. The default UnicodeCollator applies the Unicode
Collation Algorithm with the default table (DUCET) via pyuca, the same
root-locale ordering a browser's localeCompare produces:

1. primary:   base letters ("Ø" sorts with "O", "ß" as "ss")
2. secondary: accents
3. tertiary:  case, lowercase before uppercase

Format characters such as the soft hyphen are ignorable.
So "resume" < "résumé" < "Résumé" < "resumes", independent of platform.
"""

from functools import lru_cache
from typing import Optional, Protocol, Tuple

import pyuca


class Collator(Protocol):
    """Comparator abstraction used by the ordering checker."""

    def compare(self, a: str, b: str) -> int:
        """Negative if a sorts first, zero if equal, positive if b sorts first."""
        ...

    def sort_key(self, text: str) -> object:
        ...


@lru_cache()
def _ducet_collator() -> pyuca.Collator:
    # Loading the collation table is slow, so it is shared by every instance
    return pyuca.Collator()


class UnicodeCollator:
    """Deterministic UCA collator backed by pyuca's DUCET table."""

    def __init__(self, collator: Optional[pyuca.Collator] = None):
        self._collator = collator or _ducet_collator()

    def sort_key(self, text: str) -> Tuple[int, ...]:
        return self._collator.sort_key(text)

    def compare(self, a: str, b: str) -> int:
        key_a, key_b = self.sort_key(a), self.sort_key(b)
        return (key_a > key_b) - (key_a < key_b)


DEFAULT_COLLATOR = UnicodeCollator()
