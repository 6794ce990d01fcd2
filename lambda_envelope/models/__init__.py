"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .invocation import RawInvocationResult
from .response import Encoding, Response

__all__ = [
    "Encoding",
    "RawInvocationResult",
    "Response",
]
