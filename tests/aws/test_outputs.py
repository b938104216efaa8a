import asyncio

import pytest
from botocore.exceptions import NoCredentialsError

from sitelift.aws.outputs import (
    OUTPUT_NAMES,
    StaticWebsiteOutputs,
    output_param_name,
    website_domain,
)
from sitelift.exceptions import OperationError

from .fakes import FakeHome


def params(**values):
    return {f"/sitelift/blog/prod/site/{name}": value for name, value in values.items()}


@pytest.fixture
def outputs(home):
    return StaticWebsiteOutputs(home, "blog", "prod", "site")


def test_output_param_name():
    assert output_param_name("blog", "prod", "site", "bucketName") == (
        "/sitelift/blog/prod/site/bucketName"
    )


def test_website_domain_prefers_first_custom_domain():
    assert website_domain(["www.example.com", "example.com"], "d1.cloudfront.net") == (
        "www.example.com"
    )
    assert website_domain([], "d1.cloudfront.net") == "d1.cloudfront.net"


def test_outputs_resolve_from_parameters():
    home = FakeHome(
        params(
            bucketName="blog-prod-site-bucket",
            domain="www.example.com",
            cname="d1.cloudfront.net",
            distributionId="E2QWRUHEXAMPLE",
        )
    )
    outputs = StaticWebsiteOutputs(home, "blog", "prod", "site")

    assert asyncio.run(outputs.bucket_name()) == "blog-prod-site-bucket"
    assert asyncio.run(outputs.domain()) == "www.example.com"
    assert asyncio.run(outputs.cname()) == "d1.cloudfront.net"
    assert asyncio.run(outputs.distribution_id()) == "E2QWRUHEXAMPLE"


def test_missing_output_resolves_to_none(outputs):
    assert asyncio.run(outputs.bucket_name()) is None
    assert asyncio.run(outputs.distribution_id()) is None


def test_outputs_are_never_cached(home, outputs):
    assert asyncio.run(outputs.bucket_name()) is None

    home.params.update(params(bucketName="blog-prod-site-bucket"))

    assert asyncio.run(outputs.bucket_name()) == "blog-prod-site-bucket"
    assert home.reads == ["/sitelift/blog/prod/site/bucketName"] * 2


def test_resolve_all(home, outputs):
    home.params.update(params(bucketName="bucket", cname="d1.cloudfront.net"))

    resolved = asyncio.run(outputs.resolve_all())

    assert list(resolved) == list(OUTPUT_NAMES)
    assert resolved == {
        "bucketName": "bucket",
        "domain": None,
        "cname": "d1.cloudfront.net",
        "distributionId": None,
    }


def test_transport_failure_raises_operation_error(home, outputs):
    home.fail = True

    with pytest.raises(OperationError, match="Failed to read output") as e:
        asyncio.run(outputs.bucket_name())

    assert e.value.target == "/sitelift/blog/prod/site/bucketName"


def test_missing_credentials_raise_operation_error(home, outputs):
    home.error = NoCredentialsError()

    with pytest.raises(OperationError, match="Unable to locate credentials") as e:
        asyncio.run(outputs.distribution_id())

    assert e.value.operation == "read output"
    assert e.value.target == "/sitelift/blog/prod/site/distributionId"
    assert isinstance(e.value.__cause__, NoCredentialsError)
