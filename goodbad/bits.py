"""Packing of per-variant flags into compact bit sets."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["pack_bools", "bit_at"]


def pack_bools(bools: Iterable[bool]) -> bytes:
    """Pack flags into bytes, eight per byte, least significant bit first."""
    packed = bytearray()
    for index, flag in enumerate(bools):
        bit = index & 0x7
        if bit == 0:
            packed.append(int(bool(flag)))
        elif flag:
            packed[-1] |= 1 << bit
    return bytes(packed)


def bit_at(packed: bytes, index: int) -> bool:
    """Return the flag stored at ``index`` in a packed bit set.

    Raises IndexError when ``index`` lies outside the packed bytes.
    """
    if index < 0:
        raise IndexError(f"bit index {index} is negative")
    byte_index, bit_index = index >> 3, index & 0x7
    try:
        byte = packed[byte_index]
    except IndexError:
        raise IndexError(
            f"bit index {index} is out of range for {len(packed)} packed byte(s)"
        ) from None
    return (byte >> bit_index) & 1 != 0