"""
Pages served behind the edge router.

The maintenance page is the rewrite target of maintenance mode; the
locale landing endpoint is the entry point of every localized page.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from api.dependencies import get_routing_mode
from shared.config import Settings, get_settings

from .models import LocaleInfo, LocaleRoutingMode, RoutingMode

router = APIRouter()

MAINTENANCE_HTML = """<!DOCTYPE html>
<html lang="fr">
<head><meta charset="utf-8"><title>{brand} - Maintenance</title></head>
<body>
<h1>{brand}</h1>
<p>Le site est actuellement en maintenance. Merci de revenir plus tard.</p>
<p>The site is currently under maintenance. Please check back later.</p>
</body>
</html>
"""


@router.get("/maintenance.html", response_class=HTMLResponse)
async def maintenance_page(settings: Settings = Depends(get_settings)) -> HTMLResponse:
    """Static maintenance page."""
    return HTMLResponse(MAINTENANCE_HTML.format(brand=settings.brand_name), status_code=503)


@router.get("/{locale}", response_model=LocaleInfo)
async def locale_index(
    locale: str,
    mode: RoutingMode = Depends(get_routing_mode),
) -> LocaleInfo:
    """
    Locale landing endpoint.

    Returns the locale context page logic renders with.
    """
    if not isinstance(mode, LocaleRoutingMode) or locale not in mode.supported_locales:
        raise HTTPException(status_code=404, detail="Page not found")
    return LocaleInfo(
        locale=locale,
        default_locale=mode.default_locale,
        supported_locales=list(mode.supported_locales),
    )
