"""
Function-style access to the thought store.

This is the contract the CLI (or any other caller) uses:

    store = open_store()                 # locate, open, init schema
    thought_id = add_thought(store, "buy milk")
    list_thoughts(store, 7)
    soft_delete(store, thought_id)
    close_store(store)

open_store returns a ThoughtStore, which is also a context manager.
"""

from collections.abc import Mapping
from pathlib import Path

from jot.schema import APP_NAME, DEFAULT_LIST_LIMIT, StoreConfig, Thought
from jot.store.db import ThoughtStore
from jot.store.paths import resolve_db_path


def open_store(
    app_name: str | StoreConfig = APP_NAME,
    override_dir: Path | str | None = None,
    file_name: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ThoughtStore:
    """
    Open the thought store for an app, creating directory, file and schema as needed.

    Args:
        app_name: App identifier, or a complete StoreConfig
        override_dir: Explicit data directory (ignored when a StoreConfig is given)
        file_name: Database file name (ignored when a StoreConfig is given)
        environ: Environment mapping used for the <APPNAME>_DATA_DIR lookup

    Returns:
        An open, schema-initialized ThoughtStore

    Raises:
        DataDirectoryError: If the data directory cannot be created
        StorageConnectionError: If the database cannot be opened
    """
    if isinstance(app_name, StoreConfig):
        config = app_name
    else:
        config = StoreConfig(
            app_name=app_name,
            data_dir=Path(override_dir) if override_dir is not None else None,
            file_name=file_name,
        )

    db_path = resolve_db_path(
        config.app_name,
        override_dir=config.data_dir,
        file_name=config.db_file_name,
        environ=environ,
    )
    return ThoughtStore(db_path)


def add_thought(store: ThoughtStore, text: str) -> int:
    """Insert a thought and return its id."""
    return store.add_thought(text)


def list_thoughts(store: ThoughtStore, limit: int = DEFAULT_LIST_LIMIT) -> list[Thought]:
    """Active thoughts, most recent first; limit < 0 means all."""
    return store.list_thoughts(limit)


def get_thought(store: ThoughtStore, thought_id: int) -> Thought | None:
    return store.get_thought(thought_id)


def count_thoughts(store: ThoughtStore, include_deleted: bool = False) -> int:
    return store.count_thoughts(include_deleted)


def soft_delete(store: ThoughtStore, thought_id: int) -> bool:
    """Soft-delete a thought; False means nothing changed."""
    return store.soft_delete(thought_id)


def close_store(store: ThoughtStore | None) -> None:
    """Release the store. Safe to call repeatedly or with None."""
    if store is not None:
        store.close()
