"""
Waltz overlay diagram service

Entity name resolution, generic selectors, assessment-based filtering and
aggregate overlay diagram widgets over the Waltz catalogue schema.
"""

__version__ = "1.0.0"
