"""
CSAF wire format.

This package converts between the internal product model and the
``product_tree`` substructure of a CSAF document.
"""

from csaftree.wire.models import (
    WireBranchCategory,
    WireProduct,
    WireBranch,
    WireFullProductName,
    WireRelationship
)
from csaftree.wire.exporter import (
    export_product_tree,
    export_relationships,
    export_product_tree_document
)
from csaftree.wire.importer import (
    parent_of,
    import_relationships,
    import_product_tree,
    import_product_tree_document
)

__all__ = [
    "WireBranchCategory",
    "WireProduct",
    "WireBranch",
    "WireFullProductName",
    "WireRelationship",
    "export_product_tree",
    "export_relationships",
    "export_product_tree_document",
    "parent_of",
    "import_relationships",
    "import_product_tree",
    "import_product_tree_document",
]
