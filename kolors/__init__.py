"""Core package for the kolors palette manager.

Only the data migration engine and its storage/operator surfaces live here;
the interactive palette editor is a separate application.
"""

__all__: list[str] = []
