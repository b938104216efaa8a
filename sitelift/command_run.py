"""Command execution context for sitelift CLI operations.

CommandRun loads the project's sitelift_app.py for an environment, sets the app
context, declares the app's components (without creating any cloud resource) and
prepares the AWS clients used by deployment operations.
"""

import getpass
import logging
import sys
from importlib import import_module
from pathlib import Path
from typing import Self

import pulumi

from sitelift.app import SiteliftApp
from sitelift.aws.home import AwsHome
from sitelift.aws.outputs import StaticWebsiteOutputs
from sitelift.aws.s3 import StaticWebsite
from sitelift.aws.s3.deployment import ProgressCallback, StaticWebsiteDeployer
from sitelift.aws.s3.sync import S3Sync
from sitelift.aws.session import cloudfront_client, create_session, s3_client
from sitelift.component import ComponentRegistry
from sitelift.context import AppContext, _ContextStore, context
from sitelift.exceptions import ConfigurationError, SiteliftProjectError
from sitelift.project import APP_FILE, get_project_root, get_user_env

logger = logging.getLogger(__name__)

APP_MODULE = Path(APP_FILE).stem


def _import_app_module() -> None:
    logger.debug("CWD %s", Path.cwd())

    original_sys_path = list(sys.path)
    try:
        project_root = get_project_root()
    except ValueError as e:
        logger.exception("Failed to find sitelift project")
        raise SiteliftProjectError(
            f"No sitelift project found. Create a {APP_FILE} file in your project directory."
        ) from e

    logger.debug("PROJECT ROOT: %s", project_root)
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))
    # Always execute the project file again so the app registers itself
    sys.modules.pop(APP_MODULE, None)
    SiteliftApp._reset()  # noqa: SLF001
    try:
        import_module(APP_MODULE)
    finally:
        sys.path = original_sys_path


def _load_context(env: str) -> SiteliftApp:
    _import_app_module()

    app = SiteliftApp.get_instance()
    logger.debug("Getting project configuration for environment: %s", env)
    config = app._execute_user_config_func(env)  # noqa: SLF001

    username = get_user_env() or getpass.getuser()
    if not config.is_valid_environment(env, username):
        raise ConfigurationError(
            f"Invalid environment '{env}'. Use your username '{username}' for personal "
            f"environments or one of: {config.environments}"
        )

    _ContextStore.clear()
    _ContextStore.set(AppContext(name=app.name, env=env, aws=config.aws))
    ComponentRegistry.clear()
    return app


def load_app(env: str) -> AppContext:
    """Load the project app for env, set the app context and declare its components."""
    app = _load_context(env)
    app._declare_components()  # noqa: SLF001
    return context()


def run_pulumi_program(env: str | None = None) -> None:
    """Create the app's cloud resources. Called from the __main__.py of a Pulumi project.

    The environment defaults to the name of the Pulumi stack being deployed.
    """
    app = _load_context(env or pulumi.get_stack())
    app._get_pulumi_program_func()()  # noqa: SLF001


class CommandRun:
    def __init__(self, env: str) -> None:
        self.env = env
        self._ctx: AppContext | None = None
        self._home: AwsHome | None = None
        self._s3 = None
        self._cloudfront = None

    def __enter__(self) -> Self:
        self._ctx = load_app(self.env)
        session = create_session(self._ctx.aws)
        self._home = AwsHome(session)
        self._s3 = s3_client(session)
        self._cloudfront = cloudfront_client(session)
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> bool:
        _ContextStore.clear()
        ComponentRegistry.clear()
        return False

    @property
    def app_name(self) -> str:
        return self._ctx.name

    def websites(self, name: str | None = None) -> list[StaticWebsite]:
        websites = list(ComponentRegistry.instances_of(StaticWebsite))
        if name is None:
            return websites
        selected = [website for website in websites if website.name == name]
        if not selected:
            raise ConfigurationError(
                f"No static website named '{name}' in app '{self.app_name}'. "
                f"Available: {', '.join(w.name for w in websites) or 'none'}"
            )
        return selected

    def deployer(
        self, website: StaticWebsite, on_progress: ProgressCallback | None = None
    ) -> StaticWebsiteDeployer:
        outputs = StaticWebsiteOutputs(self._home, self._ctx.name, self._ctx.env, website.name)
        return StaticWebsiteDeployer(
            website.name,
            website.config,
            outputs,
            S3Sync(self._s3),
            self._cloudfront,
            on_progress=on_progress,
        )
