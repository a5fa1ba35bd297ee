"""
Document session.

A ``DocumentSession`` owns the three collections the editor works on (product
tree, product families, relationships) and exposes the entry points the rest
of the application uses. Every mutation replaces the affected collection with
a new one, so observers holding the previous value never see a half-applied
change.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from csaftree.config import SessionConfig
from csaftree.core.identity import PidGenerator
from csaftree.core.model import (
    BranchCategory,
    ProductFamily,
    ProductTreeBranch,
    ProductTreeBranchWithParents,
    Relationship,
    RelationshipCategory
)
from csaftree.relationships import graph
from csaftree.tree import branches as tree
from csaftree.tree import families as family_ops
from csaftree.wire.exporter import export_product_tree_document
from csaftree.wire.importer import ErrorHook, import_product_tree_document

logger = logging.getLogger(__name__)


class DocumentSession:
    """Product tree, families and relationships of one open document.

    Example:
        session = DocumentSession()
        vendor = default_product_tree_branch(BranchCategory.VENDOR)
        vendor.name = "Acme"
        session.add(None, vendor)

        product_tree = session.export()
    """

    def __init__(
        self,
        products: Optional[List[ProductTreeBranch]] = None,
        families: Optional[List[ProductFamily]] = None,
        relationships: Optional[List[Relationship]] = None,
        config: Optional[SessionConfig] = None
    ):
        self._config = config or SessionConfig()
        self.products: List[ProductTreeBranch] = list(products or [])
        self.families: List[ProductFamily] = list(families or [])
        self.relationships: List[Relationship] = list(relationships or [])
        self._rid_generator = self._new_rid_generator()

    @property
    def config(self) -> SessionConfig:
        return self._config

    def reset(self) -> None:
        """Start a new, empty document."""
        self.products = []
        self.families = []
        self.relationships = []
        self._rid_generator = self._new_rid_generator()

    # Product tree

    def find(self, branch_id: str) -> Optional[ProductTreeBranch]:
        return tree.find_branch(self.products, branch_id)

    def find_with_parents(self, branch_id: str) -> Optional[ProductTreeBranchWithParents]:
        return tree.find_branch_with_parents(self.products, branch_id)

    def by_category(self, category: BranchCategory) -> List[ProductTreeBranch]:
        return tree.branches_by_category(self.products, category)

    def add(self, parent_id: Optional[str], branch: ProductTreeBranch) -> None:
        self.products = tree.add_branch(self.products, parent_id, branch)

    def update(self, branch: ProductTreeBranch) -> None:
        self.products = tree.update_branch(self.products, branch)

    def delete(self, branch_id: str) -> None:
        """Delete a branch with its subtree.

        Relationships that use one of the removed versions as source or
        target are deleted as well.
        """
        branch = self.find(branch_id)
        if branch is None:
            logger.warning(f"Cannot delete branch {branch_id}: not found")
            return

        self.products = tree.delete_branch(self.products, branch_id)

        removed = set()
        for version_id in tree.version_ids_under(branch):
            removed.update(r.id for r in self.by_source_version(version_id))
            removed.update(r.id for r in self.by_target_version(version_id))

        if removed:
            self.relationships = [r for r in self.relationships if r.id not in removed]

    def full_product_name(self, branch_id: str) -> str:
        return tree.full_product_name(
            self.products, branch_id, self._config.full_name_separator
        )

    def display_name(self, branch: ProductTreeBranch) -> Tuple[str, bool]:
        return tree.branch_display_name(
            self.products,
            branch,
            untitled=self._config.untitled_version_name,
            separator=self._config.full_name_separator
        )

    def selectable_refs(self) -> List[Dict[str, Any]]:
        return tree.selectable_refs(
            self.products, self.relationships, self._config.full_name_separator
        )

    def grouped_selectable_refs(self) -> Dict[str, List[Dict[str, Any]]]:
        return tree.grouped_selectable_refs(
            self.products, self.relationships, self._config.full_name_separator
        )

    # Product families

    def find_family(self, family_id: str) -> Optional[ProductFamily]:
        return family_ops.find_family(self.families, family_id)

    def add_family(self, family: ProductFamily) -> None:
        self.families = family_ops.add_family(self.families, family)

    def update_family(self, family: ProductFamily) -> None:
        self.families = family_ops.update_family(self.families, family)

    def delete_family(self, family_id: str) -> None:
        self.families = family_ops.delete_family(self.families, family_id)

    def family_chain(self, family: ProductFamily) -> List[ProductFamily]:
        return family_ops.family_chain(family, self.families)

    def family_chain_string(self, family: ProductFamily) -> str:
        return family_ops.family_chain_string(
            family, self.families, self._config.family_chain_separator
        )

    # Relationships

    def by_source_version(self, version_id: str) -> List[Relationship]:
        return graph.relationships_by_source_version(self.relationships, version_id)

    def by_target_version(self, version_id: str) -> List[Relationship]:
        return graph.relationships_by_target_version(self.relationships, version_id)

    def group_by_category(
        self,
        relationships: Optional[List[Relationship]] = None
    ) -> Dict[RelationshipCategory, List[Relationship]]:
        if relationships is None:
            relationships = self.relationships
        return graph.group_by_category(relationships)

    def add_or_update_relationship(self, relationship: Relationship) -> None:
        """Store a relationship; its edge ids are never handed out again."""
        self._rid_generator.reserve(e.relationship_id for e in relationship.edges)
        self.relationships = graph.add_or_update_relationship(
            self.relationships, relationship
        )

    def delete_relationship(self, relationship: Relationship) -> None:
        self.relationships = graph.delete_relationship(self.relationships, relationship)

    def set_version_pairs(
        self,
        relationship: Relationship,
        product1_version_ids: List[str],
        product2_version_ids: List[str]
    ) -> Relationship:
        """Expand a relationship to the given version selections and store it."""
        updated = graph.set_version_pairs(
            relationship,
            product1_version_ids,
            product2_version_ids,
            self._rid_generator
        )
        self.add_or_update_relationship(updated)
        return updated

    # Wire format

    def export(self) -> Dict[str, Any]:
        """Export the ``product_tree`` object of the document."""
        return export_product_tree_document(
            self.products,
            self.families,
            self.relationships,
            self.full_product_name
        )

    def import_document(
        self,
        document: Dict[str, Any],
        on_error: Optional[ErrorHook] = None
    ) -> None:
        """Replace the session state with the product tree of a CSAF document.

        Accepts a whole CSAF document or just its ``product_tree`` object.
        """
        product_tree = document.get("product_tree", document)
        products, families, relationships = import_product_tree_document(
            product_tree, on_error=on_error
        )
        self.products = products
        self.families = families
        self.relationships = relationships
        self._rid_generator = self._new_rid_generator()
        logger.info(
            f"Imported {len(products)} vendors, {len(families)} families, "
            f"{len(relationships)} relationships"
        )

    def _new_rid_generator(self) -> PidGenerator:
        return PidGenerator(
            prefix=self._config.relationship_id_prefix,
            padding=self._config.wire_id_padding,
            reserved=[e.relationship_id for r in self.relationships for e in r.edges]
        )

    def __repr__(self) -> str:
        return (
            f"DocumentSession(products={len(self.products)}, "
            f"families={len(self.families)}, "
            f"relationships={len(self.relationships)})"
        )
