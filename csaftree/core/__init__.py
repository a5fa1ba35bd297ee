"""
Core data model and identifiers.
"""

from csaftree.core.identity import generate_id, PidGenerator
from csaftree.core.model import (
    BranchCategory,
    ProductType,
    RelationshipCategory,
    ProductTreeBranch,
    ProductTreeBranchWithParents,
    ProductFamily,
    RelationshipEdge,
    Relationship,
    default_product_tree_branch,
    default_product_family,
    default_relationship
)

__all__ = [
    "generate_id",
    "PidGenerator",
    "BranchCategory",
    "ProductType",
    "RelationshipCategory",
    "ProductTreeBranch",
    "ProductTreeBranchWithParents",
    "ProductFamily",
    "RelationshipEdge",
    "Relationship",
    "default_product_tree_branch",
    "default_product_family",
    "default_relationship",
]
