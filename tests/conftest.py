import pytest

from sitelift.app import SiteliftApp
from sitelift.component import ComponentRegistry
from sitelift.config import AwsConfig
from sitelift.context import AppContext, _ContextStore
from sitelift.project import get_project_root


@pytest.fixture(autouse=True)
def clean_registries():
    ComponentRegistry._instances.clear()
    ComponentRegistry._registered_names.clear()
    SiteliftApp._reset()
    get_project_root.cache_clear()


@pytest.fixture(autouse=True)
def app_context():
    _ContextStore.clear()
    _ContextStore.set(
        AppContext(
            name="test",
            env="test",
            aws=AwsConfig(profile="default", region="us-east-1"),
        )
    )
    yield
    _ContextStore.clear()


SAMPLE_APP = """\
from sitelift.app import SiteliftApp
from sitelift.aws.s3 import StaticWebsite
from sitelift.config import AwsConfig, SiteliftAppConfig

app = SiteliftApp("blog")


@app.config
def configuration(env: str) -> SiteliftAppConfig:
    return SiteliftAppConfig(aws=AwsConfig(region="us-east-1"), environments=["prod"])


@app.run
def run() -> None:
    StaticWebsite(
        "site",
        path="public",
        domain="www.example.com",
        certificate="arn:aws:acm:us-east-1:123456789012:certificate/abc-123",
    )
"""


@pytest.fixture
def project_cwd(monkeypatch, tmp_path):
    """Provide a temporary sitelift project root and chdir into it."""
    project_dir = tmp_path / "blog"
    project_dir.mkdir()
    (project_dir / "sitelift_app.py").write_text(SAMPLE_APP)
    public = project_dir / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>Blog</body></html>")
    (public / "post.html").write_text("<html><body>Post</body></html>")
    (project_dir / ".sitelift").mkdir()
    (project_dir / ".sitelift" / "userenv").write_text("tester")

    monkeypatch.chdir(project_dir)
    yield project_dir
    get_project_root.cache_clear()
