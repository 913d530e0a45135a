"""
Schema definitions for jot.

This module defines the Pydantic models used throughout jot:
- Thought/ThoughtState: A stored note and its lifecycle state
- StoreConfig: Which app name, directory and file a store lives in
- JotConfig: User preferences loaded from an optional YAML file

Design Decisions:
    - Thoughts are immutable value snapshots of a database row
    - Unknown row columns are ignored, unknown config keys are rejected
    - Timestamps stay in the database's string format (UTC, milliseconds)
"""

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jot.errors import ConfigError

# Default application name; also names the database file and env vars
APP_NAME = "jot"

# Number of thoughts shown by `jot list` without --limit
DEFAULT_LIST_LIMIT = 7

# Config file looked up inside the data directory
CONFIG_FILE_NAME = "config.yaml"

# Env var pointing at an alternate config file
CONFIG_ENV_VAR = "JOT_CONFIG"


# =============================================================================
# Thought Models
# =============================================================================


class ThoughtState(str, Enum):
    """
    Lifecycle state of a thought.

    ACTIVE is entered on insert. DELETED is terminal and entered once,
    by a successful soft delete.
    """

    ACTIVE = "active"
    DELETED = "deleted"


class Thought(BaseModel):
    """
    A single stored note.

    Attributes:
        id: Store-assigned identifier, never reused
        text: The note exactly as it was stored
        created_at: UTC insertion time, e.g. 2025-01-31T09:15:02.123Z
        deleted_at: UTC soft-delete time, or None while active
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Store-assigned identifier", ge=1)
    text: str = Field(..., description="The note text")
    created_at: str = Field(..., description="UTC insertion timestamp")
    deleted_at: str | None = Field(
        default=None,
        description="UTC soft-delete timestamp",
    )

    @property
    def state(self) -> ThoughtState:
        """Lifecycle state derived from deleted_at."""
        return ThoughtState.ACTIVE if self.deleted_at is None else ThoughtState.DELETED

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def from_row(cls, row: Mapping) -> "Thought":
        """Build a Thought from a sqlite3.Row (or any mapping)."""
        return cls.model_validate(dict(row))


# =============================================================================
# Configuration Models
# =============================================================================


class StoreConfig(BaseModel):
    """
    Where a thought store lives.

    Passed explicitly to open_store so nothing deep in the store reads
    ambient process state.

    Attributes:
        app_name: Names the default data dir, the env override and the db file
        data_dir: Explicit directory override (highest priority)
        file_name: Database file name (defaults to <app_name>.db)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_name: str = Field(default=APP_NAME, min_length=1)
    data_dir: Path | None = Field(
        default=None,
        description="Explicit data directory override",
    )
    file_name: str | None = Field(
        default=None,
        description="Database file name",
        min_length=1,
    )

    @property
    def db_file_name(self) -> str:
        return self.file_name or f"{self.app_name}.db"


class JotConfig(BaseModel):
    """
    User preferences for the jot CLI.

    Example config.yaml:
        list_limit: 10
        confirm_delete: false
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    list_limit: int = Field(
        default=DEFAULT_LIST_LIMIT,
        description="Thoughts shown by `jot list`; -1 for all",
        ge=-1,
    )
    confirm_delete: bool = Field(
        default=True,
        description="Ask before soft-deleting a thought",
    )


# =============================================================================
# Loading Functions
# =============================================================================


def load_config(path: Path | str) -> JotConfig:
    """
    Load a JotConfig from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated JotConfig object

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation
    """
    path = Path(path)
    try:
        with path.open() as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(path=str(path), reason=str(e)) from e

    return load_config_from_string(content, source=str(path))


def load_config_from_string(content: str, source: str = "<string>") -> JotConfig:
    """Load a JotConfig from a YAML string."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(path=source, reason=f"not valid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(path=source, reason="top level must be a mapping")

    try:
        return JotConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(path=source, reason=str(e)) from e


def locate_config(
    explicit: Path | None,
    data_dir: Path,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """
    Find the config file to load.

    Order: explicit path, then $JOT_CONFIG, then <data_dir>/config.yaml
    if it exists. Returns None when no config applies.
    """
    if explicit is not None:
        return explicit

    env = os.environ if environ is None else environ
    if env_path := env.get(CONFIG_ENV_VAR):
        return Path(env_path)

    candidate = data_dir / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    return None
