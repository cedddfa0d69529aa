# tests/test_umalqura.py

import pytest

from hijricalc.core.errors import ContractViolationError
from hijricalc.core.types import RABI_1, RABI_2
from hijricalc.engines.civil import civil_month_length, civil_year_length, civil_year_start
from hijricalc.engines.umalqura import (
    TABLE_END_YEAR,
    TABLE_START_YEAR,
    UMALQURA_MONTH_MASKS,
    UmmAlQuraTable,
)


def test_table_covers_1318_to_1480():
    assert TABLE_START_YEAR == 1318
    assert TABLE_END_YEAR == 1480
    assert len(UMALQURA_MONTH_MASKS) == 163
    assert all(0 <= m < (1 << 12) for m in UMALQURA_MONTH_MASKS)


def test_range_boundaries():
    t = UmmAlQuraTable()
    assert not t.is_in_range(1317)
    assert t.is_in_range(1318)
    assert t.is_in_range(1480)
    assert not t.is_in_range(1481)


def test_civil_below_table_and_mask_at_start(umalqura):
    for m in range(12):
        assert umalqura.month_length(1317, m) == civil_month_length(1317, m)
    # 0x0574 = 0101 0111 0100, most significant bit first
    expected = [29, 30, 29, 30, 29, 30, 30, 30, 29, 30, 29, 29]
    assert [umalqura.month_length(1318, m) for m in range(12)] == expected


def test_month_lengths_after_table_are_civil(umalqura):
    for y in (1481, 1500, 2000):
        for m in range(12):
            assert umalqura.month_length(y, m) == civil_month_length(y, m)
        assert umalqura.year_length(y) == civil_year_length(y)


def test_bad_month_rejected(umalqura):
    with pytest.raises(ContractViolationError):
        umalqura.month_length(1400, 12)
    with pytest.raises(ContractViolationError):
        umalqura.month_length(1200, -1)


def test_year_start_continuity(umalqura):
    assert umalqura.year_start(1318) == civil_year_start(1317) + civil_year_length(1317)
    for y in range(1300, 1520):
        assert umalqura.year_start(y + 1) - umalqura.year_start(y) == umalqura.year_length(y)


def test_year_lengths_in_table():
    t = UmmAlQuraTable()
    for y in range(TABLE_START_YEAR, TABLE_END_YEAR + 1):
        assert 353 <= t.year_length(y) <= 356


def test_month_start_sums_lengths(umalqura):
    y = 1434
    acc = umalqura.year_start(y)
    for m in range(12):
        assert umalqura.month_start(y, m) == acc
        acc += umalqura.month_length(y, m)
    assert umalqura.month_start(y, 12) == umalqura.year_start(y + 1)


def test_1434_rabi_lengths(umalqura):
    assert umalqura.month_length(1434, RABI_1) == 29
    assert umalqura.month_length(1434, RABI_2) == 30


def test_decode_inverts_encode_across_table_edges(umalqura):
    for y in list(range(1314, 1322)) + list(range(1430, 1440)) + list(range(1476, 1486)):
        doy = 0
        for m in range(12):
            start = umalqura.month_start(y, m)
            for d in range(1, umalqura.month_length(y, m) + 1):
                doy += 1
                h = umalqura.decode(start + d - 1)
                assert (h.year, h.month, h.day, h.day_of_year) == (y, m, d, doy)


def test_1975_05_06(umalqura):
    h = umalqura.decode(2442539 - umalqura.epoch_jd)
    assert (h.year, h.month) == (1395, RABI_2)
