"""
Utility functions module.

Clock handling and divide-by-zero guards shared by the calculators.

Time Semantics:
- Recommendation timestamps are always UTC
- Callers may inject a fixed timestamp so identical inputs give identical output
"""
