"""Public catalogue service."""

from __future__ import annotations

from .errors import RequestCancelledError
from .service import RepoCatalogueService

__all__ = ["RepoCatalogueService", "RequestCancelledError"]
