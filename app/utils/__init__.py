"""
Utility package exports
"""

from app.utils.helpers import flatten_list, normalize_tags

__all__ = ["flatten_list", "normalize_tags"]
