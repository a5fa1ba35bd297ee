"""
Export of the internal model to the CSAF wire format.

The internal tree is strictly vendor → product → version. In the wire format
the product families a product belongs to become real ancestor branches:
a product whose family chain is ``[f1, ..., fn]`` is emitted as
``f1 → ... → fn → product`` at the position the product had among its
siblings.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from csaftree.core.model import (
    BranchCategory,
    ProductFamily,
    ProductTreeBranch,
    Relationship
)
from csaftree.tree.branches import relationship_full_product_name
from csaftree.tree.families import family_chain, find_family
from csaftree.wire.models import (
    WireBranch,
    WireBranchCategory,
    WireFullProductName,
    WireProduct,
    WireRelationship,
    dump_branches,
    dump_relationships
)

logger = logging.getLogger(__name__)

FullNameResolver = Callable[[str], str]


def export_product_tree(
    branches: List[ProductTreeBranch],
    families: List[ProductFamily],
    full_name: FullNameResolver
) -> List[Dict[str, Any]]:
    """Convert the product tree to ``product_tree.branches``.

    Args:
        branches: Root branch list (vendors)
        families: All product families of the document
        full_name: Returns the composed display name of a version id; used
            when a version has no explicit ``product_name``

    Returns:
        List of JSON-ready wire branch dictionaries

    Example:
        export_product_tree(tree, families, lambda vid: full_product_name(tree, vid))
    """
    return dump_branches(_export_branches(branches, families, full_name))


def _export_branches(
    branches: List[ProductTreeBranch],
    families: List[ProductFamily],
    full_name: FullNameResolver
) -> List[WireBranch]:
    return [_export_branch(b, families, full_name) for b in branches]


def _export_branch(
    branch: ProductTreeBranch,
    families: List[ProductFamily],
    full_name: FullNameResolver
) -> WireBranch:
    if branch.category == BranchCategory.PRODUCT_VERSION:
        product_name = branch.product_name
        if product_name is None:
            product_name = full_name(branch.id)
        return WireBranch(
            category=WireBranchCategory.PRODUCT_VERSION,
            name=branch.name,
            product=WireProduct(
                name=product_name,
                product_id=branch.id,
                product_identification_helper=branch.identification_helper
            )
        )

    node = WireBranch(
        category=WireBranchCategory(branch.category.value),
        name=branch.name,
        branches=(
            _export_branches(branch.sub_branches, families, full_name)
            if branch.sub_branches else None
        )
    )

    if branch.category != BranchCategory.PRODUCT_NAME:
        return node

    chain = _resolve_family_chain(branch, families)
    # Innermost family wraps the product, outermost family takes its place
    for family in reversed(chain):
        node = WireBranch(
            category=WireBranchCategory.PRODUCT_FAMILY,
            name=family.name,
            branches=[node]
        )
    return node


def _resolve_family_chain(
    branch: ProductTreeBranch,
    families: List[ProductFamily]
) -> List[ProductFamily]:
    """Family chain of a product; empty when it has no (resolvable) family."""
    if not branch.family_id:
        return []

    family = find_family(families, branch.family_id)
    if family is None:
        logger.warning(
            f"Product {branch.id} references unknown family {branch.family_id}, "
            f"exporting it without family"
        )
        return []

    return family_chain(family, families)


def export_relationships(
    relationships: List[Relationship],
    branches: Optional[List[ProductTreeBranch]] = None
) -> List[Dict[str, Any]]:
    """Flatten relationships to ``product_tree.relationships``.

    Each edge becomes one wire relationship. The relationship's name is used
    as the full product name; unnamed relationships get the composed
    "<source> <category> <target>" name when ``branches`` is given.
    """
    records = []
    for relationship in relationships:
        for edge in relationship.edges:
            name = relationship.name
            if not name and branches is not None:
                name = relationship_full_product_name(
                    branches,
                    edge.product1_version_id,
                    edge.product2_version_id,
                    relationship.category.value
                )
            records.append(WireRelationship(
                category=relationship.category,
                product_reference=edge.product1_version_id,
                relates_to_product_reference=edge.product2_version_id,
                full_product_name=WireFullProductName(
                    name=name,
                    product_id=edge.relationship_id
                )
            ))
    return dump_relationships(records)


def export_product_tree_document(
    branches: List[ProductTreeBranch],
    families: List[ProductFamily],
    relationships: List[Relationship],
    full_name: FullNameResolver
) -> Dict[str, Any]:
    """Build the whole ``product_tree`` object.

    ``relationships`` is left out when there are none.
    """
    product_tree: Dict[str, Any] = {
        "branches": export_product_tree(branches, families, full_name)
    }
    wire_relationships = export_relationships(relationships, branches)
    if wire_relationships:
        product_tree["relationships"] = wire_relationships
    return product_tree
