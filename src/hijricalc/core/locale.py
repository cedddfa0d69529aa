"""
hijricalc.core.locale
---------------------
Minimal locale handling: extract the calendar keyword from an ICU-style
(`ar_SA@calendar=islamic-civil`) or BCP 47 (`ar-SA-u-ca-islamic-civil`)
identifier and map it to a CalculationType.
"""

from __future__ import annotations
from typing import List, Optional

from .types import CalculationType


def calendar_keyword(locale: Optional[str]) -> Optional[str]:
    """Return the value of the calendar keyword, or None if absent."""
    if not locale:
        return None

    if "@" in locale:
        _, _, keywords = locale.partition("@")
        for kv in keywords.split(";"):
            key, sep, value = kv.partition("=")
            if sep and key.strip().lower() == "calendar":
                return value.strip() or None
        return None

    subtags = locale.replace("_", "-").split("-")
    try:
        u = [s.lower() for s in subtags].index("u")
    except ValueError:
        return None
    ext = subtags[u + 1:]
    for i, tag in enumerate(ext):
        if tag.lower() != "ca":
            continue
        parts: List[str] = []
        for t in ext[i + 1:]:
            # next 2-char key or singleton ends the type value
            if len(t) <= 2:
                break
            parts.append(t)
        return "-".join(parts) or None
    return None


_KEYWORD_TYPES = {
    "islamic-civil": CalculationType.CIVIL,
    "islamic-umalqura": CalculationType.UMALQURA,
    "islamic-tbla": CalculationType.TBLA,
}


def calculation_type_for_locale(locale: Optional[str]) -> CalculationType:
    """
    Map the calendar keyword to a CalculationType. Matching is exact and
    case-sensitive; a missing, plain "islamic" or unrecognized value gives
    ASTRONOMICAL.
    """
    kw = calendar_keyword(locale)
    return _KEYWORD_TYPES.get(kw or "", CalculationType.ASTRONOMICAL)
