from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from sitelift.aws.cloudfront.dtos import EdgeFunctionSpec
from sitelift.aws.cloudfront.js import (
    redirect_to_main_domain_js,
    request_function_js,
    response_headers_function_js,
)
from sitelift.component import safe_name

if TYPE_CHECKING:
    from sitelift.aws.s3.config import StaticWebsiteConfig

# CloudFront function names are limited to 64 characters and are not suffixed by Pulumi
FUNCTION_NAME_MAX_LENGTH = 64

SECURITY_HEADERS = MappingProxyType(
    {
        "x-frame-options": "SAMEORIGIN",
        "x-content-type-options": "nosniff",
        "x-xss-protection": "1; mode=block",
        "strict-transport-security": "max-age=63072000",
    }
)


def security_headers(config: StaticWebsiteConfig) -> dict[str, dict[str, str]]:
    """Default security headers in CloudFront Functions format ({"name": {"value": ...}})."""
    removed = {"x-frame-options"} if config.allow_iframe else set()
    return {
        name: {"value": value} for name, value in SECURITY_HEADERS.items() if name not in removed
    }


def _function_name(prefix: str, website_name: str, kind: str) -> str:
    return safe_name(prefix, f"{website_name}-{kind}", FUNCTION_NAME_MAX_LENGTH, "", 0)


def build_response_function(
    prefix: str, website_name: str, config: StaticWebsiteConfig
) -> EdgeFunctionSpec:
    return EdgeFunctionSpec(
        name=_function_name(prefix, website_name, "response"),
        event_type="viewer-response",
        code=response_headers_function_js(security_headers(config)),
    )


def build_request_function(
    prefix: str, website_name: str, config: StaticWebsiteConfig
) -> EdgeFunctionSpec | None:
    """Build the viewer-request function, or None when no request logic is enabled."""
    fragments = []
    if config.redirect_to_main_domain and config.main_domain is not None:
        fragments.append(redirect_to_main_domain_js(config.main_domain))

    if not fragments:
        return None

    return EdgeFunctionSpec(
        name=_function_name(prefix, website_name, "request"),
        event_type="viewer-request",
        code=request_function_js(fragments),
    )


def build_edge_functions(
    prefix: str, website_name: str, config: StaticWebsiteConfig
) -> list[EdgeFunctionSpec]:
    functions = [build_response_function(prefix, website_name, config)]
    request_function = build_request_function(prefix, website_name, config)
    if request_function is not None:
        functions.append(request_function)
    return functions
