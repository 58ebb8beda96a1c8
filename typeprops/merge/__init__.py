"""Non-destructive merge of derived validators into hand-written ones."""

from .lib import declared_names, merge, missing_entries

__all__ = ["merge", "missing_entries", "declared_names"]
