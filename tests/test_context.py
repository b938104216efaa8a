from hashlib import sha256

import pytest

from sitelift.component import safe_name
from sitelift.config import AwsConfig
from sitelift.context import AppContext, _ContextStore, context


@pytest.fixture
def clear_context():
    _ContextStore.clear()
    yield
    _ContextStore.clear()


def test_context_is_available_once_set():
    assert context().name == "test"
    assert context().env == "test"
    assert context().aws.region == "us-east-1"


@pytest.mark.usefixtures("clear_context")
def test_context_before_initialization_raises():
    with pytest.raises(RuntimeError, match="context not initialized"):
        context()


def test_context_can_only_be_set_once():
    with pytest.raises(RuntimeError, match="already been initialized"):
        _ContextStore.set(AppContext(name="other", env="dev", aws=AwsConfig()))


def test_prefix_is_lowercase():
    ctx = AppContext(name="Blog", env="Prod", aws=AwsConfig())

    assert ctx.prefix() == "blog-prod-"
    assert ctx.prefix("site-cdn") == "blog-prod-site-cdn"


def test_function_name_fits_without_truncation():
    assert safe_name("blog-prod-", "site-response", 64, "", 0) == "blog-prod-site-response"


def test_function_name_at_exact_limit():
    # 64 - 10 (prefix) leaves 54 chars
    name = "s" * 54

    assert safe_name("blog-prod-", name, 64, "", 0) == f"blog-prod-{name}"


def test_long_name_is_truncated_with_hash():
    name = "documentation-" * 5 + "request"
    expected_hash = sha256(name.encode()).hexdigest()[:7]

    result = safe_name("blog-prod-", name, 64, "", 0)

    # 54 available - 8 (dash + hash) = 46 chars kept
    assert result == f"blog-prod-{name[:46]}-{expected_hash}"
    assert len(result) == 64


def test_names_differing_after_cut_stay_distinct():
    base = "w" * 60

    response = safe_name("blog-prod-", f"{base}-response", 64, "", 0)
    request = safe_name("blog-prod-", f"{base}-request", 64, "", 0)

    assert response != request
    assert response[:-8] == request[:-8]


def test_pulumi_suffix_is_reserved():
    # 63 - 10 (prefix) - 8 (Pulumi suffix) leaves 45 chars
    assert len(safe_name("blog-prod-", "b" * 50, 63)) == 63 - 8


def test_prefix_too_long():
    with pytest.raises(ValueError, match="Cannot create safe name"):
        safe_name("a-very-long-application-name-production-", "site", 40, "", 0)


def test_no_room_for_hash():
    with pytest.raises(ValueError, match="Not enough space for name truncation"):
        safe_name("blog-prod-", "site-response", 16, "", 0)


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name(name):
    with pytest.raises(ValueError, match="Name cannot be empty or whitespace-only"):
        safe_name("blog-prod-", name, 64, "", 0)
