"""
Unit tests for the Config and period segment layouts.
"""
from time_ledger.models.segment_layout import (
    SEGMENT_LAYOUT,
    build_config_requests,
    default_config_snapshot,
    is_period_segment_name,
)


def _sheet_ids(requests):
    """Collect every sheetId referenced by a list of batch requests."""
    ids = set()
    for request in requests:
        body = next(iter(request.values()))
        location = body.get('start') or body.get('range')
        ids.add(location['sheetId'])
    return ids


class TestSegmentLayout:
    """Test suite for SEGMENT_LAYOUT."""

    def test_fixed_positions(self):
        assert SEGMENT_LAYOUT.closed_flag_cell == 'A1'
        assert SEGMENT_LAYOUT.append_anchor == 'A6'
        assert SEGMENT_LAYOUT.entry_range == 'A6:C'
        assert SEGMENT_LAYOUT.end_cell(9) == 'C9'

    def test_entry_row_leaves_derived_columns_empty(self):
        assert SEGMENT_LAYOUT.entry_row('2024-01-15', '9:00:00 AM') == [
            '2024-01-15', '9:00:00 AM', None, None, None
        ]

    def test_entry_row_with_description(self):
        row = SEGMENT_LAYOUT.entry_row('2024-01-15', '9:00:00 AM', 'Planning')
        assert row == ['2024-01-15', '9:00:00 AM', None, None, None, 'Planning']

    def test_formulas(self):
        assert SEGMENT_LAYOUT.summary_formulas() == [
            ('Total Hours:', '=SUM(D6:D)'),
            ('Total Billable:', '=SUM(E6:E)'),
        ]
        assert SEGMENT_LAYOUT.seed_formulas() == [
            '=IF(C6<>"", MOD(C6-B6, 1), "")',
            '=IF(D6<>"", D6*24*Config!$B$1, "")',
        ]

    def test_requests_target_only_the_given_sheet(self):
        # Act
        requests = SEGMENT_LAYOUT.build_requests(sheet_id=987)

        # Assert
        assert _sheet_ids(requests) == {987}

    def test_requests_for_different_sheets_do_not_share_state(self):
        # Act
        first = SEGMENT_LAYOUT.build_requests(sheet_id=1)
        second = SEGMENT_LAYOUT.build_requests(sheet_id=2)

        # Assert
        assert _sheet_ids(first) == {1}
        assert _sheet_ids(second) == {2}

    def test_closed_flag_is_a_checkbox(self):
        # Act
        checkbox = SEGMENT_LAYOUT.build_requests(sheet_id=5)[0]['updateCells']

        # Assert
        assert checkbox['start'] == {'sheetId': 5, 'rowIndex': 0, 'columnIndex': 0}
        assert checkbox['rows'][0]['values'][0]['dataValidation']['condition']['type'] == 'BOOLEAN'

    def test_number_formats(self):
        # Act
        formats = [
            r['repeatCell']['cell']['userEnteredFormat']['numberFormat']
            for r in SEGMENT_LAYOUT.build_requests(sheet_id=5)
            if 'repeatCell' in r
        ]

        # Assert
        assert [f['type'] for f in formats] == ['DATE', 'TIME', 'TIME', 'TIME', 'CURRENCY', 'TEXT']
        assert formats[1]['pattern'] == 'h:mm:ss AM/PM'
        assert formats[3]['pattern'] == '[h]:mm:ss'

    def test_seed_formulas_land_in_first_entry_row(self):
        # Act
        seed = SEGMENT_LAYOUT.build_requests(sheet_id=5)[-1]['updateCells']

        # Assert
        assert seed['start'] == {'sheetId': 5, 'rowIndex': 5, 'columnIndex': 3}


class TestConfigLayout:
    """Test suite for the Config segment helpers."""

    def test_config_requests(self):
        # Act
        requests = build_config_requests(sheet_id=3)

        # Assert
        assert _sheet_ids(requests) == {3}
        rows = requests[0]['updateCells']['rows']
        assert rows[0]['values'][1]['userEnteredValue'] == {'numberValue': 100}
        assert rows[1]['values'][1]['userEnteredValue'] == {'stringValue': 'UTC'}

    def test_default_snapshot_reads_as_text(self):
        assert default_config_snapshot() == {'Hourly Rate': '100', 'Timezone': 'UTC'}


class TestPeriodSegmentName:
    """Test suite for is_period_segment_name."""

    def test_date_names(self):
        assert is_period_segment_name('2024-01-15')

    def test_other_names(self):
        assert not is_period_segment_name('Config')
        assert not is_period_segment_name('2024-1-15')
        assert not is_period_segment_name('Copy of 2024-01-15')
