# tests/test_locale.py

import pytest

from hijricalc.core.locale import calculation_type_for_locale, calendar_keyword
from hijricalc.core.types import CalculationType


@pytest.mark.parametrize(
    "locale, keyword",
    [
        ("ar_SA@calendar=islamic-civil", "islamic-civil"),
        ("ar_SA@collation=standard;calendar=islamic-umalqura", "islamic-umalqura"),
        ("ar_SA@CALENDAR=islamic-tbla", "islamic-tbla"),
        ("ar-SA-u-ca-islamic-civil", "islamic-civil"),
        ("ar-SA-u-ca-islamic-umalqura-nu-arab", "islamic-umalqura"),
        ("ar_SA_u_ca_islamic", "islamic"),
        ("ar_SA@collation=standard", None),
        ("ar-SA-u-nu-arab", None),
        ("ar_SA", None),
        ("", None),
        (None, None),
    ],
)
def test_calendar_keyword(locale, keyword):
    assert calendar_keyword(locale) == keyword


@pytest.mark.parametrize(
    "locale, expected",
    [
        ("ar_SA@calendar=islamic-civil", CalculationType.CIVIL),
        ("ar_SA@calendar=islamic-umalqura", CalculationType.UMALQURA),
        ("ar_SA@calendar=islamic-tbla", CalculationType.TBLA),
        ("ar_SA@calendar=islamic", CalculationType.ASTRONOMICAL),
        ("ar_SA@calendar=islamic-xyzzy", CalculationType.ASTRONOMICAL),
        ("ar_SA@calendar=ISLAMIC-CIVIL", CalculationType.ASTRONOMICAL),
        ("ar_SA@calendar=gregorian", CalculationType.ASTRONOMICAL),
        ("ar_SA", CalculationType.ASTRONOMICAL),
        (None, CalculationType.ASTRONOMICAL),
    ],
)
def test_calculation_type_for_locale(locale, expected):
    assert calculation_type_for_locale(locale) is expected
