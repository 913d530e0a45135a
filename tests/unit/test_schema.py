"""
Unit tests for schema models and config loading.

Tests cover:
- Thought validation and derived state
- StoreConfig defaults and validation
- JotConfig loading from YAML files and strings
- Config file lookup order
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from jot.errors import ConfigError
from jot.schema import (
    CONFIG_FILE_NAME,
    DEFAULT_LIST_LIMIT,
    JotConfig,
    StoreConfig,
    Thought,
    ThoughtState,
    load_config,
    load_config_from_string,
    locate_config,
)


class TestThought:
    """Tests for the Thought model."""

    def test_active_thought(self) -> None:
        thought = Thought(id=1, text="hi", created_at="2025-01-01T00:00:00.000Z")
        assert thought.state == ThoughtState.ACTIVE
        assert not thought.is_deleted

    def test_deleted_thought(self) -> None:
        thought = Thought(
            id=1,
            text="hi",
            created_at="2025-01-01T00:00:00.000Z",
            deleted_at="2025-01-02T00:00:00.000Z",
        )
        assert thought.state == ThoughtState.DELETED
        assert thought.is_deleted

    def test_frozen(self) -> None:
        thought = Thought(id=1, text="hi", created_at="2025-01-01T00:00:00.000Z")
        with pytest.raises(ValidationError):
            thought.text = "changed"

    def test_id_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Thought(id=0, text="hi", created_at="2025-01-01T00:00:00.000Z")

    def test_from_row_ignores_extra_columns(self) -> None:
        row = {
            "id": 3,
            "text": "row",
            "created_at": "2025-01-01T00:00:00.000Z",
            "deleted_at": None,
            "unexpected": "ignored",
        }
        thought = Thought.from_row(row)
        assert thought.id == 3
        assert not hasattr(thought, "unexpected")

    def test_from_row_requires_columns(self) -> None:
        with pytest.raises(ValidationError):
            Thought.from_row({"id": 1, "text": "no timestamp"})


class TestStoreConfig:
    """Tests for StoreConfig."""

    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.app_name == "jot"
        assert config.data_dir is None
        assert config.db_file_name == "jot.db"

    def test_file_name_follows_app_name(self) -> None:
        assert StoreConfig(app_name="notes").db_file_name == "notes.db"

    def test_explicit_file_name(self) -> None:
        assert StoreConfig(file_name="x.sqlite").db_file_name == "x.sqlite"

    def test_empty_app_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(app_name="")


class TestLoadConfig:
    """Tests for loading JotConfig."""

    def test_defaults(self) -> None:
        config = JotConfig()
        assert config.list_limit == DEFAULT_LIST_LIMIT
        assert config.confirm_delete is True

    def test_from_string(self, sample_config_yaml: str) -> None:
        config = load_config_from_string(sample_config_yaml)
        assert config.list_limit == 3
        assert config.confirm_delete is False

    def test_from_file(self, temp_dir: Path, sample_config_yaml: str) -> None:
        path = temp_dir / "config.yaml"
        path.write_text(sample_config_yaml)

        assert load_config(path).list_limit == 3

    def test_empty_file_gives_defaults(self) -> None:
        assert load_config_from_string("") == JotConfig()

    def test_unlimited_allowed(self) -> None:
        assert load_config_from_string("list_limit: -1").list_limit == -1

    def test_limit_below_minus_one_rejected(self) -> None:
        with pytest.raises(ConfigError):
            load_config_from_string("list_limit: -2")

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_string("colour: blue")
        assert "colour" in exc_info.value.reason

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_string("list_limit: [1, 2", source="broken.yaml")
        assert exc_info.value.path == "broken.yaml"

    def test_non_mapping(self) -> None:
        with pytest.raises(ConfigError):
            load_config_from_string("- just\n- a list\n")

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(temp_dir / "nope.yaml")


class TestLocateConfig:
    """Tests for config file lookup order."""

    def test_explicit_wins(self, temp_dir: Path) -> None:
        explicit = temp_dir / "explicit.yaml"
        (temp_dir / CONFIG_FILE_NAME).write_text("list_limit: 1")

        result = locate_config(explicit, temp_dir, environ={"JOT_CONFIG": "/env.yaml"})
        assert result == explicit

    def test_env_var(self, temp_dir: Path) -> None:
        (temp_dir / CONFIG_FILE_NAME).write_text("list_limit: 1")

        result = locate_config(None, temp_dir, environ={"JOT_CONFIG": "/env.yaml"})
        assert result == Path("/env.yaml")

    def test_data_dir_file(self, temp_dir: Path) -> None:
        (temp_dir / CONFIG_FILE_NAME).write_text("list_limit: 1")

        assert locate_config(None, temp_dir, environ={}) == temp_dir / CONFIG_FILE_NAME

    def test_nothing_found(self, temp_dir: Path) -> None:
        assert locate_config(None, temp_dir, environ={}) is None
