"""
Geographic bounds for factual_query.
"""

from .circle import Circle, parse_geo_json

__all__ = ["Circle", "parse_geo_json"]
