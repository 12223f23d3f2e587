"""Ephemeris table generation (optional).

Computes the solar-term and moon-phase instants that the Chinese calendar
reads from ``TDBtimes.txt``. Install with:
  pip install "kalendarilo[ephemeris]"
"""


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "kalendarilo[ephemeris]"') from e
