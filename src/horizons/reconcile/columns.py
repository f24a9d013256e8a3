"""Spreadsheet column addressing helpers (1-based)."""

from __future__ import annotations


def column_number_to_letter(column: int) -> str:
    """Convert a 1-based column number to its letter label (1 -> A, 27 -> AA)."""
    if column < 1:
        raise ValueError(f"Column number must be >= 1, got {column}")
    letters = ""
    while column > 0:
        column, remainder = divmod(column - 1, 26)
        letters = chr(remainder + 65) + letters
    return letters


def column_letter_to_number(letters: str) -> int:
    """Inverse of column_number_to_letter (case-insensitive)."""
    letters = letters.strip().upper()
    if not letters or not letters.isalpha() or not letters.isascii():
        raise ValueError(f"Invalid column letters: {letters!r}")
    number = 0
    for ch in letters:
        number = number * 26 + (ord(ch) - 64)
    return number
