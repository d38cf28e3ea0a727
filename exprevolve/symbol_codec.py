#!/usr/bin/env python3
"""
Bit <-> symbol mapping used by chromosomes.

Each 4-bit quadruplet encodes one symbol:
  0-9   -> the digit
  10-14 -> "+", "-", "*", "/", "**"
  15    -> nothing (dropped)

Bits are packed MSB-first into bytes and the last byte is zero-padded, so a
chromosome of 4 * k bits with k odd decodes one extra trailing "0".
"""

from typing import Iterable, List, Sequence, Tuple

SYMBOLS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9",
           "+", "-", "*", "/", "**")

NIBBLE_FOR_SYMBOL = {sym: i for i, sym in enumerate(SYMBOLS)}


def symbol_for(nibble: int) -> str:
    """Symbol for a 4-bit value, or "" for anything outside the table."""
    if 0 <= nibble < len(SYMBOLS):
        return SYMBOLS[nibble]
    return ""


def nibble_for(symbol: str) -> int:
    try:
        return NIBBLE_FOR_SYMBOL[symbol]
    except KeyError:
        raise ValueError(f"No quadruplet encodes {symbol!r}") from None


def to_bytes(bits: Sequence[bool]) -> bytes:
    """Pack bits MSB-first, zero-padding the final byte."""
    out = bytearray()
    for i in range(0, len(bits), 8):
        byte = 0
        chunk = bits[i:i + 8]
        for bit in chunk:
            byte = (byte << 1) | (1 if bit else 0)
        byte <<= 8 - len(chunk)
        out.append(byte)
    return bytes(out)


def decode(bits: Sequence[bool]) -> str:
    """
    Decode a bit sequence into expression text. Never fails; the text it
    returns is very often not valid arithmetic.
    """
    parts = []
    for byte in to_bytes(bits):
        parts.append(symbol_for((byte >> 4) & 0xF))
        parts.append(symbol_for(byte & 0xF))
    return "".join(parts)


def split_symbols(text: str) -> List[str]:
    """Split text into codec symbols, reading "**" as a single symbol."""
    symbols = []
    i = 0
    while i < len(text):
        if text.startswith("**", i):
            symbols.append("**")
            i += 2
        else:
            symbols.append(text[i])
            i += 1
    return symbols


def encode(text: str) -> Tuple[bool, ...]:
    """
    Inverse of decode(): 4 bits per symbol.
    Raises ValueError for characters the codec can't represent (spaces,
    parentheses, letters...).
    """
    bits: List[bool] = []
    for sym in split_symbols(text):
        n = nibble_for(sym)
        bits.extend(bool((n >> shift) & 1) for shift in (3, 2, 1, 0))
    return tuple(bits)


def bitstring(bits: Iterable[bool]) -> str:
    return "".join("1" if bit else "0" for bit in bits)
