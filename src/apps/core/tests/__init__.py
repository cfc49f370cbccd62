"""
Core app tests package.

Unit tests for filters, criteria binding, specifications and paging.
"""
