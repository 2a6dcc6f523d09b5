"""One-byte-per-cell encodings of the fuel output maps.

Inactive cells are always written as 0. The fuel type map stores
fuel type + 1 so that fuel type 0 (unclassified) stays distinguishable from
inactive cells. Percentage maps store the raw 0-100 value.
"""

from __future__ import annotations

INACTIVE = 0


def _to_byte(value: int) -> int:
    return max(0, min(255, value))


def encode_fuel_map(fuel_types: list[list[int]], active: list[list[bool]]) -> bytes:
    """Encode a fuel type grid, row-major."""
    out = bytearray()
    for values, flags in zip(fuel_types, active):
        for value, is_active in zip(values, flags):
            out.append(_to_byte(value + 1) if is_active else INACTIVE)
    return bytes(out)


def encode_percent_map(percents: list[list[int]], active: list[list[bool]]) -> bytes:
    """Encode a 0-100 percentage grid, row-major."""
    out = bytearray()
    for values, flags in zip(percents, active):
        for value, is_active in zip(values, flags):
            out.append(_to_byte(value) if is_active else INACTIVE)
    return bytes(out)
