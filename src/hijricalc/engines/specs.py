"""
hijricalc.engines.specs
-----------------------
Pure-data descriptions of the four calculation types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from ..core.time import ASTRONOMICAL_EPOCH_JD, CIVIL_EPOCH_JD
from ..core.types import CalculationType


@dataclass(frozen=True)
class ArithmeticSpec:
    calc_type: CalculationType
    kind: Literal["civil", "astronomical", "umalqura"]
    epoch_jd: int
    description: str


CIVIL = ArithmeticSpec(
    calc_type=CalculationType.CIVIL,
    kind="civil",
    epoch_jd=CIVIL_EPOCH_JD,
    description="Tabular 30-year cycle, Friday epoch (16 July 622 Julian).",
)

TBLA = ArithmeticSpec(
    calc_type=CalculationType.TBLA,
    kind="civil",
    epoch_jd=ASTRONOMICAL_EPOCH_JD,
    description="Tabular 30-year cycle, Thursday epoch (15 July 622 Julian).",
)

# true_month_start already counts from the day after the civil epoch day,
# so the astronomical rule shares the civil day-zero anchor.
ASTRONOMICAL = ArithmeticSpec(
    calc_type=CalculationType.ASTRONOMICAL,
    kind="astronomical",
    epoch_jd=CIVIL_EPOCH_JD,
    description="Months begin from the computed lunar conjunction (moon age).",
)

UMALQURA = ArithmeticSpec(
    calc_type=CalculationType.UMALQURA,
    kind="umalqura",
    epoch_jd=CIVIL_EPOCH_JD,
    description="Saudi Umm al-Qura month lengths for AH 1318-1480, civil rule elsewhere.",
)

ALL_SPECS: Dict[str, ArithmeticSpec] = {
    s.calc_type.value: s for s in (ASTRONOMICAL, CIVIL, UMALQURA, TBLA)
}
