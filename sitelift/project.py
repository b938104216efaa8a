import logging
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)

APP_FILE = "sitelift_app.py"


@cache
def get_project_root() -> Path:
    """Find and cache the project root by looking for sitelift_app.py.
    Raises ValueError if not found.
    """
    start_path = Path.cwd().resolve()

    current = start_path
    while current != current.parent:
        if (current / APP_FILE).exists():
            return current
        current = current.parent

    raise ValueError(f"Could not find project root: no {APP_FILE} found in parent directories")


def get_dot_sitelift_dir() -> Path:
    return get_project_root() / ".sitelift"


def _read_metadata_file(filename: str) -> str | None:
    file_path = get_dot_sitelift_dir() / filename
    if file_path.exists() and file_path.is_file():
        return file_path.read_text().strip()
    return None


def _write_metadata_file(filename: str, content: str) -> None:
    sitelift_dir = get_dot_sitelift_dir()
    sitelift_dir.mkdir(exist_ok=True, parents=True)

    file_path = sitelift_dir / filename
    try:
        file_path.write_text(content)
        logger.debug("Saved %s: %s", filename, content)
    except OSError:
        logger.exception("Failed to write .sitelift/%s", filename)


def get_user_env() -> str | None:
    return _read_metadata_file("userenv")


def save_user_env(env: str) -> None:
    _write_metadata_file("userenv", env)
