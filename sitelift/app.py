import logging
from collections.abc import Callable
from typing import ClassVar, final

from sitelift.component import ComponentRegistry
from sitelift.config import SiteliftAppConfig

logger = logging.getLogger(__name__)


type SiteliftConfigFn = Callable[[str], SiteliftAppConfig]


@final
class SiteliftApp:
    __instance: ClassVar["SiteliftApp | None"] = None

    def __init__(self, name: str):
        if SiteliftApp.__instance is not None:
            raise RuntimeError("SiteliftApp has already been instantiated.")

        self._name = name
        self._config_func = None
        self._run_func = None
        SiteliftApp.__instance = self

    @property
    def name(self) -> str:
        return self._name

    @classmethod
    def get_instance(cls) -> "SiteliftApp":
        if cls.__instance is None:
            raise RuntimeError(
                "SiteliftApp has not been instantiated. Ensure 'app = SiteliftApp(...)' is "
                "called in your sitelift_app.py."
            )
        return cls.__instance

    @classmethod
    def _reset(cls) -> None:
        """Forget the app instance. Only used when reloading the project file and in tests."""
        cls.__instance = None

    def config(self, func: SiteliftConfigFn) -> SiteliftConfigFn:
        if self._config_func:
            raise RuntimeError("Config function already registered.")
        self._config_func = func
        logger.debug("Config function '%s' registered for app '%s'.", func.__name__, self._name)
        return func

    def run(self, func: Callable[[], None]) -> Callable[[], None]:
        if self._run_func:
            raise RuntimeError("Run function already registered.")
        self._run_func = func
        logger.debug("Run function '%s' registered for app '%s'.", func.__name__, self._name)
        return func

    def _execute_user_config_func(self, env: str) -> SiteliftAppConfig:
        if not self._config_func:
            raise RuntimeError("No @SiteliftApp.config function defined.")
        app_config = self._config_func(env)
        if app_config is None or not isinstance(app_config, SiteliftAppConfig):
            raise ValueError("@app.config function must return an instance of SiteliftAppConfig.")
        return app_config

    def _declare_components(self) -> None:
        """Run the user's run function so components register themselves.

        Components create their cloud resources lazily, so declaring them here does not
        touch Pulumi. Deployment-time commands only need the declarations.
        """
        if not self._run_func:
            raise RuntimeError("No @SiteliftApp.run function defined.")
        self._run_func()

    def _get_pulumi_program_func(self) -> Callable[[], None]:
        def run() -> None:
            self._declare_components()
            self.drive()

        return run

    @staticmethod
    def drive() -> None:
        for i in ComponentRegistry.all_instances():
            _ = i.resources
