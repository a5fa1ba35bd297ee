"""
csaf-tree - Product tree & relationship core for CSAF advisory editors.

Keeps vendors, products and versions as a strict 3-level tree, product
families as a separate overlay, and relationships between products grouped
per product pair, and converts all of it to and from the CSAF
``product_tree`` wire format.

Quick Start:
    from csaftree import DocumentSession, BranchCategory, default_product_tree_branch

    session = DocumentSession()

    vendor = default_product_tree_branch(BranchCategory.VENDOR)
    vendor.name = "Acme"
    session.add(None, vendor)

    product = default_product_tree_branch(BranchCategory.PRODUCT_NAME)
    product.name = "Router"
    session.add(vendor.id, product)

    # Nested CSAF product_tree, families injected as branches
    product_tree = session.export()

    # Load the product tree of an existing advisory
    session.import_document(csaf_document)
"""

__version__ = "1.0.0"

# Core imports
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

# Configuration
from csaftree.config import SessionConfig, configure_logging

# Wire format
from csaftree.wire import (
    export_product_tree,
    export_relationships,
    import_relationships,
    import_product_tree,
    parent_of
)

# Session
from csaftree.session import DocumentSession

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
    "SessionConfig",
    "configure_logging",
    "export_product_tree",
    "export_relationships",
    "import_relationships",
    "import_product_tree",
    "parent_of",
    "DocumentSession",
]
