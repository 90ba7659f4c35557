"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.routing.models import RoutingMode
    from modules.verification.interfaces import IVerificationService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._verification_service: "IVerificationService | None" = None
        self._routing_mode: "RoutingMode | None" = None

    @property
    def verification(self) -> "IVerificationService":
        """Get the verification service instance."""
        if self._verification_service is None:
            from modules.verification.service import VerificationService
            self._verification_service = VerificationService(settings=get_settings())
        return self._verification_service

    @property
    def routing_mode(self) -> "RoutingMode":
        """Get the configured edge routing mode."""
        if self._routing_mode is None:
            from modules.routing.router import build_routing_mode
            self._routing_mode = build_routing_mode(get_settings())
        return self._routing_mode

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._verification_service = None
        self._routing_mode = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_verification_service() -> "IVerificationService":
    """FastAPI dependency for the verification service."""
    return get_container().verification


def get_routing_mode() -> "RoutingMode":
    """FastAPI dependency for the edge routing mode."""
    return get_container().routing_mode
