"""
Domains - Core search logic, independent of transport and model backends.
"""

__all__ = ["keywords", "ranking", "orchestration"]
