"""
Zone label schemes.

- `letters`: "Zone A" .. "Zone Z", then "Zone AA", "Zone AB", ... (bijective base-26, the
  same numbering spreadsheet columns use). The first 26 labels match the historical
  single-letter output; later labels stay well-formed and unique.
- `numeric`: "Zone-1", "Zone-2", ... (1-based).
"""

from __future__ import annotations

from typing import Literal

LabelScheme = Literal["letters", "numeric"]


def letters_for_index(index: int) -> str:
    """Map 0 -> "A", 25 -> "Z", 26 -> "AA", 701 -> "ZZ", 702 -> "AAA"."""
    if index < 0:
        raise ValueError(f"label index must be >= 0 (got {index})")
    n = index + 1
    chars: list[str] = []
    while n > 0:
        n, rem = divmod(n - 1, 26)
        chars.append(chr(ord("A") + rem))
    return "".join(reversed(chars))


def zone_label(index: int, *, scheme: LabelScheme = "letters", prefix: str = "Zone") -> str:
    if scheme == "letters":
        return f"{prefix} {letters_for_index(index)}"
    if scheme == "numeric":
        if index < 0:
            raise ValueError(f"label index must be >= 0 (got {index})")
        return f"{prefix}-{index + 1}"
    raise ValueError(f"Unknown label scheme '{scheme}', expected 'letters' or 'numeric'")
