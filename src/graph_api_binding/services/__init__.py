"""Service façades combining context, engine, and operation groups."""

from .graph import GraphServices

__all__ = ["GraphServices"]
