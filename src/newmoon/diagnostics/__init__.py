"""Diagnostics package.

- diagnostics: always available, light-weight checks (no ephemeris)
- diagnostics.ephem: optional (requires ephemeris extras + DE file)
"""

__all__ = ["round_trip", "plot_deltat"]
