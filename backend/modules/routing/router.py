"""
Edge routing decisions.

Every function here is pure: it takes a request path and an explicit
routing mode and returns a classification or a decision. Applying the
decision to a live request is the middleware's job.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.exceptions import ConfigurationError

from .models import (
    LocaleRoutingMode,
    MaintenanceMode,
    PassThrough,
    Redirect,
    Rewrite,
    RouteClass,
    RoutingDecision,
    RoutingMode,
)


def is_bypassed(path: str, bypass_prefixes: tuple[str, ...], dotted: bool = False) -> bool:
    """
    Check whether a path is exempt from routing.

    Args:
        path: Request path, starting with '/'
        bypass_prefixes: Exempt path prefixes
        dotted: Also exempt paths whose last segment contains a dot

    Returns:
        True if the path must pass through untouched
    """
    if any(path.startswith(prefix) for prefix in bypass_prefixes):
        return True
    if dotted and "." in path.rsplit("/", 1)[-1]:
        return True
    return False


def has_locale_prefix(path: str, locales: tuple[str, ...]) -> bool:
    """Check whether the path equals /{locale} or starts with /{locale}/."""
    return any(
        path == f"/{locale}" or path.startswith(f"/{locale}/")
        for locale in locales
    )


def classify_path(path: str, mode: LocaleRoutingMode) -> RouteClass:
    """
    Classify a path for locale routing.

    Matching is case-sensitive and anchored at the start of the path.
    A locale-looking segment that is not supported (e.g. /de/about)
    counts as unprefixed.
    """
    if is_bypassed(path, mode.bypass_prefixes, mode.bypass_dotted_paths):
        return RouteClass.BYPASS
    if has_locale_prefix(path, mode.supported_locales):
        return RouteClass.LOCALIZED
    return RouteClass.UNPREFIXED


def localized_location(path: str, query: str, locale: str) -> str:
    """Build the redirect target for an unprefixed path."""
    if path in ("", "/"):
        location = f"/{locale}"
    else:
        location = f"/{locale}{path}"
    if query:
        location = f"{location}?{query}"
    return location


def route_request(
    path: str,
    query: str,
    mode: RoutingMode,
    raw_path: Optional[str] = None,
) -> RoutingDecision:
    """
    Decide what to do with an inbound request.

    Args:
        path: Decoded request path, used for matching
        query: Raw query string, without the leading '?'
        mode: Locale redirection or maintenance rewrite
        raw_path: Path exactly as the client sent it, percent-escapes
            included. Redirect targets are built from it so that %3F or
            %2F in a segment stay escaped. Defaults to path.

    Returns:
        PassThrough, Redirect, or Rewrite
    """
    if isinstance(mode, MaintenanceMode):
        if is_bypassed(path, mode.bypass_prefixes):
            return PassThrough()
        return Rewrite(path=mode.maintenance_path)

    if classify_path(path, mode) is RouteClass.UNPREFIXED:
        return Redirect(
            location=localized_location(raw_path or path, query, mode.default_locale),
            status_code=mode.redirect_status,
        )
    return PassThrough()


def build_routing_mode(settings: Settings) -> RoutingMode:
    """
    Build the configured routing mode.

    Raises:
        ConfigurationError: If the locale or maintenance settings are invalid
    """
    try:
        if settings.routing_mode == "maintenance":
            return MaintenanceMode(
                maintenance_path=settings.maintenance_path,
                bypass_prefixes=tuple(settings.maintenance_bypass_prefixes),
            )
        return LocaleRoutingMode(
            supported_locales=tuple(settings.supported_locales),
            default_locale=settings.default_locale,
            bypass_prefixes=tuple(settings.bypass_prefixes),
            redirect_status=settings.redirect_status_code,
        )
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid routing configuration: {e}",
            code="INVALID_ROUTING_CONFIG",
            details={"routing_mode": settings.routing_mode},
        ) from e
