"""
Service Layer Package

Cross-store flows live here so the stores stay independent of each other.

- ProgressService: daily-cap aware completion, progress summary, XP-gated claims
- ServiceContainer: lazy wiring of backend, stores and services
"""

from habitquest.services.container import ServiceContainer, create_backend, get_container, init_container
from habitquest.services.progress_service import ProgressService

__all__ = [
    "ServiceContainer",
    "create_backend",
    "get_container",
    "init_container",
    "ProgressService",
]
