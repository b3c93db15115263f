"""
API layer package.
"""
