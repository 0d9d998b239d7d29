"""
Utility functions module.

Time semantics:
- Bar and observation timestamps from data feeds are always authoritative
- Macro observation dates are normalized to UTC midnight
"""
