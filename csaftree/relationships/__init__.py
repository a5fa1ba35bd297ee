"""
Relationship graph between products.
"""

from csaftree.relationships.graph import (
    relationships_by_source_version,
    relationships_by_target_version,
    group_by_category,
    add_or_update_relationship,
    delete_relationship,
    set_version_pairs
)

__all__ = [
    "relationships_by_source_version",
    "relationships_by_target_version",
    "group_by_category",
    "add_or_update_relationship",
    "delete_relationship",
    "set_version_pairs",
]
