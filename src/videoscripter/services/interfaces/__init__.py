"""
Service interfaces (ABCs) for the videoscripter application.

These abstract base classes define contracts for service implementations,
enabling dependency injection, testing with mocks, and swappable implementations.
"""

from .catalog_service_interface import CatalogServiceInterface

__all__ = [
    "CatalogServiceInterface",
]
