"""
HTTP transport for factual_query: sends a rendered Query and returns raw bytes.
"""

from .http import HttpTransport

__all__ = ["HttpTransport"]
