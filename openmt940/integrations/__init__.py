"""
Integrations with third-party libraries like Pydantic.
"""

from .pydantic import PydanticStatement, from_statement

__all__ = ["from_statement", "PydanticStatement"]
