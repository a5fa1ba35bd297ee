"""
Import of CSAF wire structures into the internal model.

Relationships arrive flattened, one record per version pair. They are merged
back into one ``Relationship`` per (category, source product, target
product), each holding the version-pair edges. Records that cannot be
resolved against the product tree are logged and skipped; one bad record
never aborts the batch.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from csaftree.core.identity import generate_id
from csaftree.core.model import (
    BranchCategory,
    ProductFamily,
    ProductTreeBranch,
    Relationship,
    RelationshipEdge
)
from csaftree.wire.models import (
    WireBranch,
    WireBranchCategory,
    WireProduct,
    WireRelationship
)

logger = logging.getLogger(__name__)

WireRecord = Union[WireRelationship, Dict[str, Any]]
ErrorHook = Callable[[Any, str], None]


def parent_of(
    target_id: str,
    branches: List[ProductTreeBranch],
    parent: Optional[ProductTreeBranch] = None
) -> Optional[ProductTreeBranch]:
    """Find the structural parent of a branch.

    Args:
        target_id: Id of the branch whose parent is wanted
        branches: Sibling list to search
        parent: Known parent of ``branches``; None at the root

    Returns:
        The parent branch, or None when the id is not in the tree or sits in
        the root list (root-level branches have no parent)

    Example:
        parent_of("1.0", vendors)  # → the product_name branch owning "1.0"
    """
    if any(branch.id == target_id for branch in branches):
        return parent

    for branch in branches:
        found = parent_of(target_id, branch.sub_branches, branch)
        if found is not None:
            return found

    return None


def import_relationships(
    records: List[WireRecord],
    branches: List[ProductTreeBranch],
    on_error: Optional[ErrorHook] = None
) -> List[Relationship]:
    """Rebuild internal relationships from flattened wire records.

    Records sharing category, source product and target product are merged
    into one relationship. A record's ``full_product_name.name`` is appended
    to the merged name unless the name already contains it. Its version pair
    becomes an edge unless an edge with the same pair exists.

    Args:
        records: Wire relationship dicts or ``WireRelationship`` models
        branches: Already imported product tree
        on_error: Optional hook called with (record, reason) for every
            skipped record

    Returns:
        Relationships in order of first appearance
    """
    relationships: List[Relationship] = []

    for record in records:
        try:
            wire = _parse_relationship(record)
        except ValidationError as e:
            _report_failure(record, f"invalid record: {e}", on_error)
            continue

        parent1 = parent_of(wire.product_reference, branches)
        parent2 = parent_of(wire.relates_to_product_reference, branches)
        if parent1 is None or parent2 is None:
            _report_failure(record, "unresolved product reference", on_error)
            continue

        name = wire.full_product_name.name
        relationship = _find_merge_target(relationships, wire, parent1.id, parent2.id)
        if relationship is None:
            relationship = Relationship(
                id=generate_id(),
                category=wire.category,
                product_id1=parent1.id,
                product_id2=parent2.id,
                name=name
            )
            relationships.append(relationship)
        elif name not in relationship.name:
            relationship.name += name

        if not relationship.has_pair(wire.product_reference, wire.relates_to_product_reference):
            relationship.edges.append(RelationshipEdge(
                product1_version_id=wire.product_reference,
                product2_version_id=wire.relates_to_product_reference,
                relationship_id=wire.full_product_name.product_id
            ))

    return relationships


def _parse_relationship(record: WireRecord) -> WireRelationship:
    if isinstance(record, WireRelationship):
        return record
    return WireRelationship.model_validate(record)


def _find_merge_target(
    relationships: List[Relationship],
    wire: WireRelationship,
    product_id1: str,
    product_id2: str
) -> Optional[Relationship]:
    for relationship in relationships:
        if (
            relationship.category == wire.category
            and relationship.product_id1 == product_id1
            and relationship.product_id2 == product_id2
        ):
            return relationship
    return None


def _report_failure(record: Any, reason: str, on_error: Optional[ErrorHook]) -> None:
    logger.error(f"Failed to parse CSAF relationship ({reason}): {record}")
    if on_error:
        on_error(record, reason)


def import_product_tree(
    wire_branches: Optional[List[Union[WireBranch, Dict[str, Any]]]]
) -> Tuple[List[ProductTreeBranch], List[ProductFamily]]:
    """Rebuild the product tree and family list from ``product_tree.branches``.

    ``product_family`` branches are removed from the tree; their children
    take their place. Each distinct path of family names becomes one
    ``ProductFamily`` whose parent is the family of the enclosing path, and
    products inside a family reference the innermost one.

    Args:
        wire_branches: Wire branch dicts or models; None means no tree

    Returns:
        Tuple of (root branch list, families)

    Raises:
        pydantic.ValidationError: If a branch does not match the wire model
    """
    parsed = [
        b if isinstance(b, WireBranch) else WireBranch.model_validate(b)
        for b in wire_branches or []
    ]
    families_by_path: Dict[Tuple[str, ...], ProductFamily] = {}
    branches = _convert_branches(parsed, (), families_by_path)
    return branches, list(families_by_path.values())


def _convert_branches(
    wire_branches: List[WireBranch],
    family_path: Tuple[str, ...],
    families_by_path: Dict[Tuple[str, ...], ProductFamily]
) -> List[ProductTreeBranch]:
    converted = []

    for wire in wire_branches:
        if wire.category == WireBranchCategory.PRODUCT_FAMILY:
            path = family_path + (wire.name,)
            if path not in families_by_path:
                parent = families_by_path.get(family_path)
                families_by_path[path] = ProductFamily(
                    id=generate_id(),
                    name=wire.name,
                    parent_id=parent.id if parent else None
                )
            # Splice the family's children into the current level
            converted.extend(_convert_branches(wire.branches or [], path, families_by_path))
            continue

        category = BranchCategory(wire.category.value)
        product = wire.product or WireProduct()
        family = None
        if category == BranchCategory.PRODUCT_NAME:
            family = families_by_path.get(family_path)

        converted.append(ProductTreeBranch(
            id=product.product_id or generate_id(),
            category=category,
            name=wire.name,
            description=product.name or "",
            sub_branches=_convert_branches(wire.branches or [], family_path, families_by_path),
            product_name=product.name,
            identification_helper=product.product_identification_helper,
            family_id=family.id if family else None
        ))

    return converted


def import_product_tree_document(
    product_tree: Optional[Dict[str, Any]],
    on_error: Optional[ErrorHook] = None
) -> Tuple[List[ProductTreeBranch], List[ProductFamily], List[Relationship]]:
    """Import a whole ``product_tree`` object.

    Returns:
        Tuple of (branches, families, relationships)
    """
    product_tree = product_tree or {}
    branches, families = import_product_tree(product_tree.get("branches"))
    relationships = import_relationships(
        product_tree.get("relationships") or [],
        branches,
        on_error=on_error
    )
    return branches, families, relationships
