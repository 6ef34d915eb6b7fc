"""
Sport Year Analytics - activity analytics pipeline for a year-in-review dashboard.
"""
__version__ = "1.0.0"
