from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

from sitelift.exceptions import ConfigurationError

DEFAULT_ERROR_DOCUMENT = "index.html"
RELATIVE_PATH_MARKERS = ("./", "../")


class SecurityConfigDict(TypedDict, total=False):
    allow_iframe: bool


@dataclass(frozen=True, kw_only=True)
class SecurityConfig:
    allow_iframe: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.allow_iframe, bool):
            raise ConfigurationError("security.allow_iframe must be a boolean")


class StaticWebsiteConfigDict(TypedDict, total=False):
    path: str | Path
    domain: str | list[str] | None
    certificate: str | None
    security: SecurityConfig | SecurityConfigDict | None
    error_page: str | None
    redirect_to_main_domain: bool


@dataclass(frozen=True, kw_only=True)
class StaticWebsiteConfig:
    """Declarative configuration of a static website.

    Attributes:
        path: Local directory holding the built website.
        domain: One or more custom domains. The first one is the main domain.
        certificate: ARN of the ACM certificate covering the domains (us-east-1).
            Required when a domain is configured.
        security: Security headers options.
        error_page: Page served for unknown URLs, relative to the bucket root.
            Defaults to index.html so single page apps can do client-side routing.
        redirect_to_main_domain: Redirect requests made on secondary domains
            to the main domain.
    """

    path: str | Path
    domain: str | list[str] | None = None
    certificate: str | None = None
    security: SecurityConfig | SecurityConfigDict | None = None
    error_page: str | None = None
    redirect_to_main_domain: bool = False
    _domains: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _security: SecurityConfig = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path, str | Path) or not str(self.path):
            raise ConfigurationError("path must be a non-empty string or Path")
        if not isinstance(self.redirect_to_main_domain, bool):
            raise ConfigurationError("redirect_to_main_domain must be a boolean")

        object.__setattr__(self, "_domains", _normalize_domains(self.domain))
        object.__setattr__(self, "_security", _normalize_security(self.security))

        if self._domains and self.certificate is None:
            raise ConfigurationError(
                "If a domain is configured, then a certificate ARN must be configured "
                "in the 'certificate' option."
            )
        if self.error_page is not None and self.error_page.startswith(RELATIVE_PATH_MARKERS):
            raise ConfigurationError(
                f"The 'error_page' option cannot start with './' or '../' "
                f"(it cannot be a relative path), got '{self.error_page}'."
            )
        if self.error_page is not None and not self.error_page.lstrip("/"):
            raise ConfigurationError("The 'error_page' option must name a file in the bucket.")

    @property
    def directory(self) -> Path:
        return Path(self.path)

    @property
    def domains(self) -> list[str]:
        """Configured domains as a list, main domain first. Empty if none."""
        return list(self._domains)

    @property
    def main_domain(self) -> str | None:
        return self._domains[0] if self._domains else None

    @property
    def allow_iframe(self) -> bool:
        return self._security.allow_iframe

    @property
    def error_document(self) -> str:
        """Key of the error page in the bucket, without a leading slash."""
        if self.error_page is None:
            return DEFAULT_ERROR_DOCUMENT
        return self.error_page.lstrip("/")


def _normalize_domains(domain: str | list[str] | None) -> tuple[str, ...]:
    if domain is None:
        return ()
    domains = [domain] if isinstance(domain, str) else domain
    if not isinstance(domains, list | tuple) or not all(
        isinstance(d, str) and d.strip() for d in domains
    ):
        raise ConfigurationError("domain must be a non-empty string or a list of them")
    return tuple(domains)


def _normalize_security(security: SecurityConfig | SecurityConfigDict | None) -> SecurityConfig:
    if security is None:
        return SecurityConfig()
    if isinstance(security, SecurityConfig):
        return security
    if isinstance(security, dict):
        try:
            return SecurityConfig(**security)
        except TypeError as e:
            raise ConfigurationError(f"Invalid security option: {e}") from e
    raise ConfigurationError("security must be a SecurityConfig or a dict")


def validate_website_config(
    config: StaticWebsiteConfig | StaticWebsiteConfigDict,
) -> StaticWebsiteConfig:
    """Return a validated StaticWebsiteConfig, building it from a dict if needed."""
    if isinstance(config, StaticWebsiteConfig):
        return config
    if isinstance(config, dict):
        try:
            return StaticWebsiteConfig(**config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid static website configuration: {e}") from e
    raise ConfigurationError(
        f"Static website configuration must be a StaticWebsiteConfig or a dict, "
        f"got {type(config).__name__}"
    )
