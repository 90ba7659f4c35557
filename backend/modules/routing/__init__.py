"""
Edge routing module.

Makes every non-exempt request path carry a supported locale prefix, or
rewrites everything to the maintenance page when the site is down.

Public API:
- route_request / classify_path: Pure routing decisions
- LocaleRoutingMode, MaintenanceMode: The two routing configurations
- LocaleRoutingMiddleware: ASGI middleware applying decisions
- build_routing_mode: Routing mode from application settings
"""

from .models import (
    RouteClass,
    LocaleRoutingMode,
    MaintenanceMode,
    RoutingMode,
    PassThrough,
    Redirect,
    Rewrite,
    RoutingDecision,
)
from .router import classify_path, route_request, build_routing_mode
from .middleware import LocaleRoutingMiddleware

__all__ = [
    # Models
    "RouteClass",
    "LocaleRoutingMode",
    "MaintenanceMode",
    "RoutingMode",
    "PassThrough",
    "Redirect",
    "Rewrite",
    "RoutingDecision",
    # Functions
    "classify_path",
    "route_request",
    "build_routing_mode",
    # Middleware
    "LocaleRoutingMiddleware",
]
