"""
Relationship graph operations.

Relationships connect two products and carry one edge per version pair.
Edits coming from the editor are trusted to be consistent, so nothing here
deduplicates; merging duplicates is the importer's job.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, List

from csaftree.core.model import Relationship, RelationshipCategory, RelationshipEdge

logger = logging.getLogger(__name__)


def relationships_by_source_version(
    relationships: List[Relationship],
    version_id: str
) -> List[Relationship]:
    """Relationships with at least one edge starting at ``version_id``."""
    return [
        r for r in relationships
        if any(e.product1_version_id == version_id for e in r.edges)
    ]


def relationships_by_target_version(
    relationships: List[Relationship],
    version_id: str
) -> List[Relationship]:
    """Relationships with at least one edge ending at ``version_id``."""
    return [
        r for r in relationships
        if any(e.product2_version_id == version_id for e in r.edges)
    ]


def group_by_category(
    relationships: List[Relationship]
) -> Dict[RelationshipCategory, List[Relationship]]:
    """Group relationships by category.

    Keys follow the order of ``RelationshipCategory``; categories without
    relationships are left out.
    """
    groups = {}
    for category in RelationshipCategory:
        members = [r for r in relationships if r.category == category]
        if members:
            groups[category] = members
    return groups


def add_or_update_relationship(
    relationships: List[Relationship],
    relationship: Relationship
) -> List[Relationship]:
    """Insert a relationship, or replace the one with the same id in place."""
    if any(r.id == relationship.id for r in relationships):
        return [relationship if r.id == relationship.id else r for r in relationships]
    return [*relationships, relationship]


def delete_relationship(
    relationships: List[Relationship],
    relationship: Relationship
) -> List[Relationship]:
    """Remove the relationship with the same id."""
    remaining = [r for r in relationships if r.id != relationship.id]
    if len(remaining) == len(relationships):
        logger.warning(f"Cannot delete relationship {relationship.id}: not found")
    return remaining


def set_version_pairs(
    relationship: Relationship,
    product1_version_ids: List[str],
    product2_version_ids: List[str],
    id_factory: Callable[[], str]
) -> Relationship:
    """Rebuild the edges of a relationship from two version selections.

    Every selected source version is paired with every selected target
    version. Pairs that already had an edge keep their ``relationship_id``;
    new pairs get one from ``id_factory``.

    Args:
        relationship: Relationship to update (left untouched)
        product1_version_ids: Selected versions of the source product
        product2_version_ids: Selected versions of the target product
        id_factory: Callable returning a fresh wire-format id

    Returns:
        Copy of the relationship with the new edge list
    """
    existing = {e.pair(): e.relationship_id for e in relationship.edges}
    edges = []
    for source in product1_version_ids:
        for target in product2_version_ids:
            relationship_id = existing.get((source, target)) or id_factory()
            edges.append(RelationshipEdge(source, target, relationship_id))
    return replace(relationship, edges=edges)
