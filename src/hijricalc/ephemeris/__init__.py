"""Ephemeris-backed elongation providers (optional).

Install with:
  pip install "hijricalc[ephemeris]"
"""


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import numpy  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "hijricalc[ephemeris]"') from e
