from pathlib import Path

import pytest

from sitelift.aws.s3.config import (
    SecurityConfig,
    StaticWebsiteConfig,
    validate_website_config,
)
from sitelift.exceptions import ConfigurationError

CERTIFICATE = "arn:aws:acm:us-east-1:123456789012:certificate/abc-123"


def test_minimal_config_defaults():
    config = StaticWebsiteConfig(path="public")

    assert config.directory == Path("public")
    assert config.domains == []
    assert config.main_domain is None
    assert config.allow_iframe is False
    assert config.error_document == "index.html"
    assert config.redirect_to_main_domain is False


@pytest.mark.parametrize(
    ("domain", "expected"),
    [
        ("example.com", ["example.com"]),
        (["www.example.com", "example.com"], ["www.example.com", "example.com"]),
    ],
)
def test_domain_is_normalized_to_ordered_list(domain, expected):
    config = StaticWebsiteConfig(path="public", domain=domain, certificate=CERTIFICATE)

    assert config.domains == expected
    assert config.main_domain == expected[0]


def test_domains_list_is_a_copy():
    config = StaticWebsiteConfig(path="public", domain="example.com", certificate=CERTIFICATE)

    config.domains.append("other.com")

    assert config.domains == ["example.com"]


@pytest.mark.parametrize("domain", ["example.com", ["www.example.com", "example.com"]])
def test_domain_without_certificate_is_rejected(domain):
    with pytest.raises(ConfigurationError, match="certificate ARN must be configured"):
        StaticWebsiteConfig(path="public", domain=domain)


def test_empty_domain_list_does_not_require_certificate():
    config = StaticWebsiteConfig(path="public", domain=[])

    assert config.domains == []


@pytest.mark.parametrize("error_page", ["./404.html", "../404.html", "../errors/404.html"])
def test_relative_error_page_is_rejected(error_page):
    with pytest.raises(ConfigurationError, match=r"cannot start with '\./' or '\.\./'"):
        StaticWebsiteConfig(path="public", error_page=error_page)


@pytest.mark.parametrize("error_page", ["404.html", "errors/404.html", ".well-known/404.html"])
def test_error_page_relative_to_bucket_root_is_accepted(error_page):
    config = StaticWebsiteConfig(path="public", error_page=error_page)

    assert config.error_document == error_page


def test_certificate_check_comes_before_error_page_check():
    with pytest.raises(ConfigurationError, match="certificate"):
        StaticWebsiteConfig(path="public", domain="example.com", error_page="./404.html")


@pytest.mark.parametrize(
    ("security", "allow_iframe"),
    [
        (None, False),
        (SecurityConfig(), False),
        (SecurityConfig(allow_iframe=True), True),
        ({"allow_iframe": True}, True),
        ({}, False),
    ],
)
def test_security_options(security, allow_iframe):
    config = StaticWebsiteConfig(path="public", security=security)

    assert config.allow_iframe is allow_iframe


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"path": ""}, "path must be a non-empty string or Path"),
        ({"path": 42}, "path must be a non-empty string or Path"),
        ({"path": "public", "domain": ["example.com", ""]}, "domain must be"),
        ({"path": "public", "domain": 42}, "domain must be"),
        ({"path": "public", "redirect_to_main_domain": "yes"}, "must be a boolean"),
        ({"path": "public", "security": {"allow_iframe": "yes"}}, "must be a boolean"),
        ({"path": "public", "security": {"unknown": True}}, "Invalid security option"),
        ({"path": "public", "security": "strict"}, "security must be"),
    ],
)
def test_invalid_values_are_rejected(kwargs, message):
    with pytest.raises(ConfigurationError, match=message):
        StaticWebsiteConfig(**kwargs)


def test_config_is_frozen():
    config = StaticWebsiteConfig(path="public")

    with pytest.raises(AttributeError):
        config.path = "dist"


def test_validate_website_config_accepts_dict():
    config = validate_website_config(
        {"path": "dist", "domain": "example.com", "certificate": CERTIFICATE}
    )

    assert isinstance(config, StaticWebsiteConfig)
    assert config.domains == ["example.com"]


def test_validate_website_config_returns_config_unchanged():
    config = StaticWebsiteConfig(path="dist")

    assert validate_website_config(config) is config


def test_validate_website_config_rejects_unknown_option():
    with pytest.raises(ConfigurationError, match="Invalid static website configuration"):
        validate_website_config({"path": "dist", "domains": ["example.com"]})


def test_validate_website_config_rejects_missing_path():
    with pytest.raises(ConfigurationError, match="Invalid static website configuration"):
        validate_website_config({"domain": "example.com"})


def test_validate_website_config_rejects_other_types():
    with pytest.raises(ConfigurationError, match="got str"):
        validate_website_config("public")


@pytest.mark.parametrize(
    ("error_page", "expected"),
    [("/404.html", "404.html"), ("//errors/404.html", "errors/404.html")],
)
def test_error_page_leading_slash_is_removed(error_page, expected):
    config = StaticWebsiteConfig(path="public", error_page=error_page)

    assert config.error_document == expected


@pytest.mark.parametrize("error_page", ["", "/", "//"])
def test_error_page_without_file_is_rejected(error_page):
    with pytest.raises(ConfigurationError, match="must name a file in the bucket"):
        StaticWebsiteConfig(path="public", error_page=error_page)
