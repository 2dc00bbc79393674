"""Typed dataclasses describing docwright site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from urllib.parse import urlsplit

from docwright._constants import DEFAULT_PORT

SOCIAL_KEYS = (
    "twitter",
    "facebook",
    "instagram",
    "linkedin",
    "github",
    "gitlab",
    "bitbucket",
)


@dc.dataclass(slots=True, frozen=True)
class SocialConfig:
    """Social handles surfaced in page headers and metadata."""

    twitter: str = ""
    facebook: str = ""
    instagram: str = ""
    linkedin: str = ""
    github: str = ""
    gitlab: str = ""
    bitbucket: str = ""

    def as_dict(self) -> dict[str, str]:
        """Return the handles keyed by network name, in declaration order."""
        return {key: getattr(self, key) for key in SOCIAL_KEYS}


@dc.dataclass(slots=True, frozen=True)
class BuildConfig:
    """Source and output directories, relative to the working directory."""

    source: str
    output: str


@dc.dataclass(slots=True, frozen=True)
class OptionsConfig:
    """Build switches."""

    ordering: bool = True


@dc.dataclass(slots=True, frozen=True)
class ServeConfig:
    """Local HTTP server settings."""

    port: int = DEFAULT_PORT


@dc.dataclass(slots=True, frozen=True)
class SiteConfig:
    """Validated contents of ``docwright.toml``.

    Attributes
    ----------
    name : str
        Site name shown in page titles and headers.
    description : str
        Site-wide description; pages without one fall back to it.
    url : str
        Public base URL, used for canonical links and the sitemap.
    social : SocialConfig
        Social handles.
    build : BuildConfig
        Source and output directories.
    options : OptionsConfig
        Build switches such as ordering-prefix stripping.
    serve : ServeConfig
        Local server settings.
    """

    name: str
    build: BuildConfig
    description: str = ""
    url: str = ""
    social: SocialConfig = dc.field(default_factory=SocialConfig)
    options: OptionsConfig = dc.field(default_factory=OptionsConfig)
    serve: ServeConfig = dc.field(default_factory=ServeConfig)

    @property
    def base_path(self) -> str:
        """Return the path component of ``url`` without a trailing slash."""
        if not self.url:
            return ""
        return urlsplit(self.url).path.rstrip("/")

    @property
    def site_url(self) -> str:
        """Return ``url`` without a trailing slash, ready for route joining."""
        return self.url.rstrip("/")


__all__ = [
    "SOCIAL_KEYS",
    "BuildConfig",
    "OptionsConfig",
    "ServeConfig",
    "SiteConfig",
    "SocialConfig",
]
