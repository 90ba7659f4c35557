"""
Routing module data models.

A routing mode is a tagged choice between locale redirection and
maintenance rewriting. The two are separate configurations and are
never combined in one router.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


class RouteClass(str, Enum):
    """Classification of an inbound request path."""

    BYPASS = "bypass"
    LOCALIZED = "localized"
    UNPREFIXED = "unprefixed"


class LocaleRoutingMode(BaseModel):
    """
    Redirect every unprefixed path to the default locale.

    Attributes:
        supported_locales: Ordered set of locale tags served by the site
        default_locale: Locale used when the path carries none
        bypass_prefixes: Path prefixes exempt from locale handling
        bypass_dotted_paths: Also exempt paths whose last segment has a dot
            (static files such as /robots.txt)
        redirect_status: HTTP status used for the redirect
    """

    model_config = {"frozen": True}

    kind: Literal["locale"] = "locale"
    supported_locales: tuple[str, ...] = ("en", "fr")
    default_locale: str = "en"
    bypass_prefixes: tuple[str, ...] = ()
    bypass_dotted_paths: bool = True
    redirect_status: int = Field(default=307, ge=300, le=399)

    @model_validator(mode="after")
    def _check_locales(self) -> "LocaleRoutingMode":
        if not self.supported_locales:
            raise ValueError("supported_locales must not be empty")
        if len(set(self.supported_locales)) != len(self.supported_locales):
            raise ValueError("supported_locales must not contain duplicates")
        for locale in self.supported_locales:
            if not locale or "/" in locale:
                raise ValueError(f"invalid locale tag: {locale!r}")
        if self.default_locale not in self.supported_locales:
            raise ValueError(
                f"default_locale {self.default_locale!r} is not in supported_locales"
            )
        return self


class MaintenanceMode(BaseModel):
    """Rewrite every non-exempt request to the maintenance page."""

    model_config = {"frozen": True}

    kind: Literal["maintenance"] = "maintenance"
    maintenance_path: str = "/maintenance.html"
    bypass_prefixes: tuple[str, ...] = ("/maintenance.html", "/_next/static", "/favicon.ico")

    @model_validator(mode="after")
    def _check_path(self) -> "MaintenanceMode":
        if not self.maintenance_path.startswith("/"):
            raise ValueError("maintenance_path must start with '/'")
        return self


RoutingMode = Annotated[
    Union[LocaleRoutingMode, MaintenanceMode],
    Field(discriminator="kind"),
]


class PassThrough(BaseModel):
    """Let the request reach the application unchanged."""

    model_config = {"frozen": True}

    kind: Literal["pass"] = "pass"


class Redirect(BaseModel):
    """Answer with an HTTP redirect the client must follow."""

    model_config = {"frozen": True}

    kind: Literal["redirect"] = "redirect"
    location: str
    status_code: int = 307


class Rewrite(BaseModel):
    """Serve a different path internally, without the client noticing."""

    model_config = {"frozen": True}

    kind: Literal["rewrite"] = "rewrite"
    path: str


RoutingDecision = Union[PassThrough, Redirect, Rewrite]


class LocaleInfo(BaseModel):
    """Locale context exposed to locale-prefixed pages."""

    locale: str
    default_locale: str
    supported_locales: list[str]
