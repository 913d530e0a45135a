"""
jot - Just-Output-Thoughts: jot quick notes to a local SQLite database.

jot keeps a per-user, append-mostly log of short free-text thoughts:
- Capture a thought with a single command
- List the most recent thoughts first
- Soft-delete by id (rows are kept, only hidden)

Example usage:
    $ jot add remember to water the plants
    $ jot list -n 3
    $ jot delete 4
"""

__version__ = "0.1.0"
__author__ = "jot Contributors"

__all__ = [
    "__version__",
    "__author__",
]
