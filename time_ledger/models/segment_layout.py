"""
Fixed layouts of the Config segment and of period segments.

Row offsets, column meanings and formula strings live here and nowhere else.
Bump SegmentLayout.version whenever the generated requests change shape.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..utils.a1_notation import column_letter

PERIOD_SEGMENT_NAME_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
CLOSED_SENTINEL = 'TRUE'

CONFIG_SEGMENT_NAME = 'Config'
CONFIG_RANGE = 'A1:B10'
HOURLY_RATE_KEY = 'Hourly Rate'
TIMEZONE_KEY = 'Timezone'
DEFAULT_CONFIG: Tuple[Tuple[str, Any], ...] = (
    (HOURLY_RATE_KEY, 100),
    (TIMEZONE_KEY, 'UTC'),
)

CURRENCY_PATTERN = '$#,##0.00'
DEFAULT_COLUMN_WIDTH = 120


@dataclass(frozen=True)
class Column:
    """A column of the entry table."""

    header: str
    number_format: Dict[str, str]
    width: int = DEFAULT_COLUMN_WIDTH


@dataclass(frozen=True)
class SegmentLayout:
    """
    Layout of a period segment.

    Attributes:
        version: Layout revision
        closed_flag_cell: Checkbox cell marking the segment invoiced
        summary_row: First row of the label/formula summary block
        header_row: Row holding column headers
        data_start_row: First entry row
        columns: Entry table columns, starting at column A
    """

    version: int
    closed_flag_cell: str
    summary_row: int
    header_row: int
    data_start_row: int
    columns: Tuple[Column, ...]

    date_column: int = 1
    start_column: int = 2
    end_column: int = 3
    total_time_column: int = 4
    billable_column: int = 5
    description_column: int = 6

    @property
    def append_anchor(self) -> str:
        return f'A{self.data_start_row}'

    @property
    def entry_range(self) -> str:
        """Open-ended range of the engine-written columns (Date..End)."""
        return f'A{self.data_start_row}:{column_letter(self.end_column)}'

    def end_cell(self, row_number: int) -> str:
        return f'{column_letter(self.end_column)}{row_number}'

    def summary_formulas(self) -> List[Tuple[str, str]]:
        first = self.data_start_row
        total = column_letter(self.total_time_column)
        billable = column_letter(self.billable_column)
        return [
            ('Total Hours:', f'=SUM({total}{first}:{total})'),
            ('Total Billable:', f'=SUM({billable}{first}:{billable})'),
        ]

    def seed_formulas(self) -> List[str]:
        """
        Total Time and Billable Amount formulas for the first entry row.

        The store extends them to appended rows. MOD(..., 1) treats an End
        earlier than Start as the next day, like the duration codec does.
        """
        row = self.data_start_row
        start = f'{column_letter(self.start_column)}{row}'
        end = f'{column_letter(self.end_column)}{row}'
        total = f'{column_letter(self.total_time_column)}{row}'
        return [
            f'=IF({end}<>"", MOD({end}-{start}, 1), "")',
            f'=IF({total}<>"", {total}*24*{CONFIG_SEGMENT_NAME}!$B$1, "")',
        ]

    def entry_row(self, date: str, start: str, description: str = None) -> List[Any]:
        """
        Values appended for a new entry.

        Derived columns are None so the store keeps their extended formulas.
        """
        row: List[Any] = [None] * (self.description_column - 1)
        row[self.date_column - 1] = date
        row[self.start_column - 1] = start
        if description:
            row.append(description)
        return row

    def build_requests(self, sheet_id: int) -> List[Dict[str, Any]]:
        """Batch requests laying out a freshly created segment."""
        requests: List[Dict[str, Any]] = [
            {
                'updateCells': {
                    'rows': [{'values': [{'dataValidation': {'condition': {'type': 'BOOLEAN'}}}]}],
                    'fields': 'dataValidation',
                    'start': {'sheetId': sheet_id, 'rowIndex': 0, 'columnIndex': 0},
                },
            },
            {
                'updateCells': {
                    'rows': [
                        {'values': [_string_cell(label), _formula_cell(formula)]}
                        for label, formula in self.summary_formulas()
                    ],
                    'fields': 'userEnteredValue',
                    'start': {'sheetId': sheet_id, 'rowIndex': self.summary_row - 1, 'columnIndex': 0},
                },
            },
            {
                'updateCells': {
                    'rows': [{'values': [_string_cell(column.header) for column in self.columns]}],
                    'fields': 'userEnteredValue',
                    'start': {'sheetId': sheet_id, 'rowIndex': self.header_row - 1, 'columnIndex': 0},
                },
            },
        ]

        for index, column in enumerate(self.columns):
            requests.append(_column_width(sheet_id, index, index + 1, column.width))

        for index, column in enumerate(self.columns):
            requests.append({
                'repeatCell': {
                    'range': {'sheetId': sheet_id, 'startColumnIndex': index, 'endColumnIndex': index + 1},
                    'cell': {'userEnteredFormat': {'numberFormat': dict(column.number_format)}},
                    'fields': 'userEnteredFormat.numberFormat',
                },
            })

        requests.append({
            'updateCells': {
                'rows': [{'values': [_formula_cell(formula) for formula in self.seed_formulas()]}],
                'fields': 'userEnteredValue',
                'start': {
                    'sheetId': sheet_id,
                    'rowIndex': self.data_start_row - 1,
                    'columnIndex': self.total_time_column - 1,
                },
            },
        })
        return requests


def _string_cell(value: str) -> Dict[str, Any]:
    return {'userEnteredValue': {'stringValue': value}}


def _formula_cell(formula: str) -> Dict[str, Any]:
    return {'userEnteredValue': {'formulaValue': formula}}


def _column_width(sheet_id: int, start: int, end: int, width: int) -> Dict[str, Any]:
    return {
        'updateDimensionProperties': {
            'range': {'sheetId': sheet_id, 'dimension': 'COLUMNS', 'startIndex': start, 'endIndex': end},
            'properties': {'pixelSize': width},
            'fields': 'pixelSize',
        },
    }


SEGMENT_LAYOUT = SegmentLayout(
    version=2,
    closed_flag_cell='A1',
    summary_row=2,
    header_row=5,
    data_start_row=6,
    columns=(
        Column('Date', {'type': 'DATE'}),
        Column('Start', {'type': 'TIME', 'pattern': 'h:mm:ss AM/PM'}),
        Column('End', {'type': 'TIME', 'pattern': 'h:mm:ss AM/PM'}),
        Column('Total Time', {'type': 'TIME', 'pattern': '[h]:mm:ss'}),
        Column('Billable Amount', {'type': 'CURRENCY', 'pattern': CURRENCY_PATTERN}),
        Column('Description', {'type': 'TEXT'}, width=240),
    ),
)


def is_period_segment_name(name: str) -> bool:
    return bool(PERIOD_SEGMENT_NAME_PATTERN.match(name))


def build_config_requests(sheet_id: int) -> List[Dict[str, Any]]:
    """Batch requests seeding a new Config segment with its defaults."""
    rows = []
    for key, value in DEFAULT_CONFIG:
        typed = {'numberValue': value} if isinstance(value, (int, float)) else {'stringValue': value}
        rows.append({'values': [_string_cell(key), {'userEnteredValue': typed}]})

    return [
        {
            'updateCells': {
                'rows': rows,
                'fields': 'userEnteredValue',
                'start': {'sheetId': sheet_id, 'rowIndex': 0, 'columnIndex': 0},
            },
        },
        {
            'repeatCell': {
                'range': {'sheetId': sheet_id, 'startColumnIndex': 1, 'endColumnIndex': 2},
                'cell': {'userEnteredFormat': {'numberFormat': {'type': 'CURRENCY', 'pattern': CURRENCY_PATTERN}}},
                'fields': 'userEnteredFormat.numberFormat',
            },
        },
        _column_width(sheet_id, 0, 2, DEFAULT_COLUMN_WIDTH),
    ]


def default_config_snapshot() -> Dict[str, str]:
    """Defaults as they read back from a freshly provisioned Config segment."""
    return {key: str(value) for key, value in DEFAULT_CONFIG}
