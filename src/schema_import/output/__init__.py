"""
Output module for persisting inferred schema mutations.
"""

from schema_import.output.writer import MutationWriter

__all__ = [
    "MutationWriter",
]
