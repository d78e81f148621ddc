"""
Interfaces - API and CLI entry points.
"""
