"""AWS-specific test fixtures shared across aws test modules."""

import asyncio

import pytest
from pulumi.runtime import set_mocks

from .fakes import FakeCloudFrontClient, FakeHome, FakeS3Client
from .pulumi_mocks import PulumiTestMocks


@pytest.fixture
def pulumi_mocks():
    """Provide shared Pulumi mocks for AWS resource testing."""
    # Pulumi needs a current event loop; earlier asyncio.run() calls leave none set.
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    mocks = PulumiTestMocks()
    set_mocks(mocks)
    yield mocks
    asyncio.set_event_loop(None)
    loop.close()


@pytest.fixture
def s3():
    return FakeS3Client()


@pytest.fixture
def cloudfront():
    return FakeCloudFrontClient()


@pytest.fixture
def home():
    return FakeHome()


@pytest.fixture
def site_dir(tmp_path):
    """Local website directory with a few files, one of them nested."""
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "index.html").write_text("<html><body>Home</body></html>")
    (directory / "style.css").write_text("body { color: blue; }")
    (directory / "assets").mkdir()
    (directory / "assets" / "logo.png").write_bytes(b"fake-png-data")
    return directory
