"""
A1 notation helpers shared by the store backends and the segment layout.
"""
import re
from typing import Optional, Tuple

_CELL_PATTERN = re.compile(r'^([A-Z]+)(\d*)$')
_FORMULA_REF_PATTERN = re.compile(r'(?<![\w.])(\$?)([A-Z]{1,3})(\$?)(\d+)(?![\w(])')


def column_index(letters: str) -> int:
    """
    Convert column letters to a 1-based index.

    Examples:
        >>> column_index('A')
        1
        >>> column_index('AA')
        27
    """
    index = 0
    for char in letters:
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index


def column_letter(index: int) -> str:
    """Convert a 1-based column index to letters."""
    if index < 1:
        raise ValueError(f"column index must be positive, got {index}")
    letters = ''
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord('A') + remainder) + letters
    return letters


def parse_cell(cell: str) -> Tuple[int, Optional[int]]:
    """
    Parse a cell reference into (column, row).

    The row part may be omitted (open-ended references such as 'C' in 'A6:C'),
    in which case row is None.

    Raises:
        ValueError: If the reference is not valid A1 notation
    """
    match = _CELL_PATTERN.match(cell.strip().upper())
    if not match:
        raise ValueError(f"Invalid cell reference: {cell!r}")
    letters, digits = match.groups()
    row = int(digits) if digits else None
    if row is not None and row < 1:
        raise ValueError(f"Invalid cell reference: {cell!r}")
    return column_index(letters), row


def parse_range(cell_range: str) -> Tuple[int, int, int, Optional[int]]:
    """
    Parse 'A1' or 'A6:C' style ranges.

    Returns:
        (start_column, start_row, end_column, end_row) where end_row is None
        for ranges that run to the bottom of the segment
    """
    parts = cell_range.split(':')
    if len(parts) > 2:
        raise ValueError(f"Invalid range: {cell_range!r}")

    start_col, start_row = parse_cell(parts[0])
    if start_row is None:
        start_row = 1

    if len(parts) == 1:
        return start_col, start_row, start_col, start_row

    end_col, end_row = parse_cell(parts[1])
    if end_col < start_col or (end_row is not None and end_row < start_row):
        raise ValueError(f"Invalid range: {cell_range!r}")
    return start_col, start_row, end_col, end_row


def qualified_range(segment_name: str, cell_range: str) -> str:
    """
    Prefix a range with its quoted segment name, e.g. 'Config'!A1:B10.

    Segment names such as 2024-01-15 must be quoted or the store parses
    them as arithmetic.
    """
    escaped = segment_name.replace("'", "''")
    return f"'{escaped}'!{cell_range}"


def shift_formula_rows(formula: str, delta: int) -> str:
    """
    Shift relative row references in a formula by delta rows.

    Absolute rows ($1) and references to other segments' absolute cells are
    left alone, mirroring how a spreadsheet extends a formula down a column.

    Examples:
        >>> shift_formula_rows('=IF(D6<>"", D6*24*Config!$B$1, "")', 1)
        '=IF(D7<>"", D7*24*Config!$B$1, "")'
    """
    def _shift(match):
        col_abs, letters, row_abs, digits = match.groups()
        row = int(digits)
        if not row_abs:
            row += delta
        return f"{col_abs}{letters}{row_abs}{row}"

    return _FORMULA_REF_PATTERN.sub(_shift, formula)
