"""
Storage module for jot.

This module provides SQLite-based persistence for thoughts and the logic
that locates the database file in the user's data directory.

Tables:
    - thoughts: id, text, created_at, deleted_at (soft delete)

Why SQLite?
    - Zero configuration (no server needed)
    - ACID transactions built-in
    - Portable single-file format
    - Perfect for local-first tools
"""

from jot.store.db import ThoughtStore
from jot.store.paths import (
    default_data_dir,
    env_var_name,
    resolve_data_dir,
    resolve_db_path,
)
from jot.store.repo import (
    add_thought,
    close_store,
    count_thoughts,
    get_thought,
    list_thoughts,
    open_store,
    soft_delete,
)

__all__ = [
    "ThoughtStore",
    "add_thought",
    "close_store",
    "count_thoughts",
    "default_data_dir",
    "env_var_name",
    "get_thought",
    "list_thoughts",
    "open_store",
    "resolve_data_dir",
    "resolve_db_path",
    "soft_delete",
]
