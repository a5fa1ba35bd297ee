"""
Product tree and product family overlay.

This package provides the lookup, query and copy-on-write mutation functions
for the vendor → product → version tree and the family forest.
"""

from csaftree.tree.branches import (
    find_branch,
    find_branch_with_parents,
    branches_by_category,
    filter_branches,
    version_ids_under,
    add_branch,
    update_branch,
    delete_branch,
    full_product_name,
    relationship_full_product_name,
    branch_display_name,
    selectable_refs,
    grouped_selectable_refs
)
from csaftree.tree.families import (
    find_family,
    add_family,
    update_family,
    delete_family,
    family_chain,
    family_chain_string,
    branches_by_family
)

__all__ = [
    "find_branch",
    "find_branch_with_parents",
    "branches_by_category",
    "filter_branches",
    "version_ids_under",
    "add_branch",
    "update_branch",
    "delete_branch",
    "full_product_name",
    "relationship_full_product_name",
    "branch_display_name",
    "selectable_refs",
    "grouped_selectable_refs",
    "find_family",
    "add_family",
    "update_family",
    "delete_family",
    "family_chain",
    "family_chain_string",
    "branches_by_family",
]
