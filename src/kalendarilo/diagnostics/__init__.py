"""Diagnostics package.

- pretty_month, new_years_table: plain text, need only an ephemeris table
- leap_months, deltat: plots, need the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["pretty_month", "new_years_table", "leap_months", "deltat"]
