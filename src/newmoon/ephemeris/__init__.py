"""Ephemeris adapters/providers (optional).

This package provides thin wrappers around external ephemeris libraries.
Install with:
  pip install "newmoon[ephemeris]"
"""

def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import numpy  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "newmoon[ephemeris]"') from e
