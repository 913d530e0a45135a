"""
Data directory resolution for jot.

Finds (and creates) the per-user directory that holds the database file.

Resolution order (highest priority first):
    1. An explicit override directory passed by the caller
    2. The <APPNAME>_DATA_DIR environment variable
    3. The platform's per-user data directory:
       - Linux/Unix: $XDG_DATA_HOME/<app> or ~/.local/share/<app>
       - macOS:      ~/Library/Application Support/<app>
       - Windows:    %APPDATA%/<app> or ~/AppData/Roaming/<app>

Every function takes an optional ``environ`` mapping; os.environ is only
consulted when none is given.
"""

import logging
import os
import re
import sys
from collections.abc import Mapping
from pathlib import Path

from jot.errors import DataDirectoryError, InvalidAppNameError

logger = logging.getLogger(__name__)

_ENV_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


def _check_app_name(app_name: str) -> None:
    if not app_name:
        raise InvalidAppNameError(app_name=app_name)


def env_var_name(app_name: str) -> str:
    """
    Name of the env var that overrides the data directory.

    "test-cli" -> "TEST_CLI_DATA_DIR"
    """
    _check_app_name(app_name)
    return f"{_ENV_UNSAFE_CHARS.sub('_', app_name).upper()}_DATA_DIR"


def default_data_dir(
    app_name: str,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """
    Platform-convention per-user data directory for an app.

    Args:
        app_name: Directory name under the platform's data root
        platform: sys.platform value to resolve for (defaults to the current one)
        environ: Environment mapping (defaults to os.environ)
        home: Home directory (defaults to Path.home())

    Returns:
        The directory path; it is not created here.
    """
    _check_app_name(app_name)
    platform = platform or sys.platform
    env = os.environ if environ is None else environ
    home = home or Path.home()

    if platform == "darwin":
        return home / "Library" / "Application Support" / app_name

    if platform.startswith("win"):
        # Roaming profile, same as the other per-user settings on Windows
        appdata = env.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / app_name

    xdg_data_home = env.get("XDG_DATA_HOME")
    base = Path(xdg_data_home) if xdg_data_home else home / ".local" / "share"
    return base / app_name


def resolve_data_dir(
    app_name: str,
    override_dir: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """
    Resolve and create the data directory for an app.

    Args:
        app_name: App identifier (also derives the env var name)
        override_dir: Explicit directory, wins over everything else
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Absolute path to an existing directory

    Raises:
        InvalidAppNameError: If app_name is empty
        DataDirectoryError: If the directory cannot be created
    """
    env = os.environ if environ is None else environ
    var = env_var_name(app_name)

    if override_dir is not None:
        data_dir = Path(override_dir)
        source = "override"
    elif env.get(var):
        data_dir = Path(env[var])
        source = var
    else:
        data_dir = default_data_dir(app_name, environ=env)
        source = "platform default"

    data_dir = data_dir.expanduser().absolute()

    if not data_dir.is_dir():
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DataDirectoryError(
                path=str(data_dir),
                underlying_error=str(e),
            ) from e
        logger.info("Created data directory %s", data_dir)

    logger.debug("Using data directory %s (%s)", data_dir, source)
    return data_dir


def resolve_db_path(
    app_name: str,
    override_dir: Path | str | None = None,
    file_name: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Full path of the database file, creating its directory if needed."""
    data_dir = resolve_data_dir(app_name, override_dir, environ)
    return data_dir / (file_name or f"{app_name}.db")
