"""
Tests for the semicolon CSV adapter and directory scan.
"""

from decimal import Decimal

import pytest

from tick_median.adapters.csv_adapter import (
    SemicolonCSVAdapter,
    discover_files,
    matches_mask,
    parse_price,
    parse_u64,
)
from tick_median.core.errors import ErrorCode, ExitCode, InputReadError


def decode(path):
    return list(SemicolonCSVAdapter().decode_file(path))


class TestParsers:

    @pytest.mark.parametrize("text,expected", [
        ("0", 0),
        ("1716810808593627", 1716810808593627),
        (" 42 ", 42),
        ("18446744073709551615", 2 ** 64 - 1),
    ])
    def test_parse_u64_valid(self, text, expected):
        assert parse_u64(text) == expected

    @pytest.mark.parametrize("text", ["", "-1", "+1", "1.5", "abc", "18446744073709551616"])
    def test_parse_u64_invalid(self, text):
        assert parse_u64(text) is None

    def test_parse_price_keeps_precision(self):
        assert parse_price("68480.100000000000000001") == Decimal("68480.100000000000000001")

    @pytest.mark.parametrize("text", ["", "abc", "nan", "inf", "1,5", "1e400", "-1e400"])
    def test_parse_price_invalid(self, text):
        assert parse_price(text) is None


class TestDecodeFile:
    """Row decoding."""

    def test_basic(self, write_csv):
        path = write_csv('a.csv', [(10, '1.5'), (20, '2.25')])
        rows = decode(path)
        assert [(o.timestamp, o.value) for o in rows] == [
            (10, Decimal('1.5')), (20, Decimal('2.25')),
        ]
        assert rows[0].origin == str(path)
        assert [o.sequence for o in rows] == [2, 3]

    def test_columns_in_any_position(self, write_csv):
        path = write_csv(
            'a.csv',
            [('x', '3.5', 'y', 99)],
            header=('exchange', 'price', 'side', 'receive_ts'),
        )
        rows = decode(path)
        assert (rows[0].timestamp, rows[0].value) == (99, Decimal('3.5'))

    def test_header_whitespace_ignored(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_text(" receive_ts ; price \n1;2\n")
        assert decode(path)[0].value == Decimal('2')

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_bytes(b"receive_ts;price\r\n1;2.5\r\n2;3.5\r\n")
        assert [o.value for o in decode(path)] == [Decimal('2.5'), Decimal('3.5')]

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_text("receive_ts;price\n1;2\n\n3;4\n")
        rows = decode(path)
        assert [o.timestamp for o in rows] == [1, 3]
        assert [o.sequence for o in rows] == [2, 4]

    def test_empty_file_skipped(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_text("")
        assert decode(path) == []

    def test_header_only(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_text("receive_ts;price\n")
        assert decode(path) == []

    def test_missing_columns(self, write_csv):
        path = write_csv('a.csv', [(1, 2)], header=('receive_ts', 'bid'))
        with pytest.raises(InputReadError) as exc:
            decode(path)
        assert exc.value.code == ErrorCode.E1004_MISSING_COLUMNS
        assert exc.value.exit_code == ExitCode.INPUT_READ_ERROR

    def test_short_row(self, tmp_path):
        path = tmp_path / 'a.csv'
        path.write_text("receive_ts;price\n1;2\n3\n")
        with pytest.raises(InputReadError) as exc:
            decode(path)
        assert exc.value.code == ErrorCode.E1005_MALFORMED_ROW
        assert exc.value.context['line'] == 3

    def test_invalid_timestamp(self, write_csv):
        path = write_csv('a.csv', [(1, 2), (-5, 3)])
        with pytest.raises(InputReadError) as exc:
            decode(path)
        assert exc.value.code == ErrorCode.E1006_INVALID_TIMESTAMP
        assert exc.value.context['line'] == 3
        assert 'a.csv' in str(exc.value)

    def test_invalid_price(self, write_csv):
        path = write_csv('a.csv', [(1, 'n/a')])
        with pytest.raises(InputReadError) as exc:
            decode(path)
        assert exc.value.code == ErrorCode.E1007_INVALID_PRICE

    def test_price_beyond_double_range(self, write_csv):
        path = write_csv('a.csv', [(1, '1e400'), (2, '5')])
        with pytest.raises(InputReadError) as exc:
            decode(path)
        assert exc.value.code == ErrorCode.E1007_INVALID_PRICE
        assert exc.value.context['line'] == 2

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(InputReadError) as exc:
            decode(tmp_path / 'missing.csv')
        assert exc.value.code == ErrorCode.E1003_FILE_READ_FAILED


class TestDiscoverFiles:
    """Directory scan and filename masks."""

    def test_mask_matching(self):
        assert matches_mask('btc_2024.csv', [])
        assert matches_mask('btc_2024.csv', ['eth', 'btc'])
        assert not matches_mask('btc_2024.csv', ['eth'])

    def test_selects_csv_files_sorted(self, tmp_path):
        for name in ['b.csv', 'a.CSV', 'notes.txt', 'c.csv.bak']:
            (tmp_path / name).write_text("receive_ts;price\n")
        (tmp_path / 'sub.csv').mkdir()

        files = discover_files(tmp_path)
        assert [f.name for f in files] == ['a.CSV', 'b.csv']

    def test_masks_filter(self, price_dir):
        files = discover_files(price_dir, ['btc'])
        assert [f.name for f in files] == ['btc_a.csv', 'btc_b.csv']

    def test_no_masks_selects_all(self, price_dir):
        assert len(discover_files(price_dir)) == 3

    def test_missing_directory(self, tmp_path):
        with pytest.raises(InputReadError) as exc:
            discover_files(tmp_path / 'nope')
        assert exc.value.code == ErrorCode.E1001_INPUT_DIR_MISSING

    def test_not_a_directory(self, tmp_path):
        path = tmp_path / 'file.csv'
        path.write_text("")
        with pytest.raises(InputReadError) as exc:
            discover_files(path)
        assert exc.value.code == ErrorCode.E1002_INPUT_NOT_DIRECTORY



if __name__ == '__main__':
    pytest.main([__file__, '-v'])
