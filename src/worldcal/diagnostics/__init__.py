"""Diagnostics package.

- pretty_month, round_trip: always available
- leap_years: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["pretty_month", "round_trip", "leap_years"]
