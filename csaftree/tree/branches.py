"""
Product tree operations.

All functions take the root branch list explicitly. Mutations never touch the
input: they return a new root list in which only the nodes on the path to the
change are rebuilt, so untouched subtrees are shared with the old tree.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from csaftree.core.model import (
    BranchCategory,
    ProductTreeBranch,
    ProductTreeBranchWithParents,
    Relationship
)

logger = logging.getLogger(__name__)


def find_branch(
    branches: List[ProductTreeBranch],
    branch_id: str
) -> Optional[ProductTreeBranch]:
    """Find a branch anywhere in the tree.

    Args:
        branches: Root branch list
        branch_id: Id to look for

    Returns:
        The first match in depth-first order, or None
    """
    for branch in branches:
        if branch.id == branch_id:
            return branch
        found = find_branch(branch.sub_branches, branch_id)
        if found is not None:
            return found
    return None


def find_branch_with_parents(
    branches: List[ProductTreeBranch],
    branch_id: str,
    parent: Optional[ProductTreeBranchWithParents] = None
) -> Optional[ProductTreeBranchWithParents]:
    """Find a branch and resolve its ancestors.

    Args:
        branches: Branch list to search
        branch_id: Id to look for
        parent: Ancestor chain of ``branches`` (None at the root)

    Returns:
        ProductTreeBranchWithParents whose ``parent`` links lead to the root,
        or None if the id is not in the tree
    """
    for branch in branches:
        current = ProductTreeBranchWithParents(branch=branch, parent=parent)
        if branch.id == branch_id:
            return current
        found = find_branch_with_parents(branch.sub_branches, branch_id, current)
        if found is not None:
            return found
    return None


def branches_by_category(
    branches: List[ProductTreeBranch],
    category: BranchCategory
) -> List[ProductTreeBranch]:
    """All branches of a category, in depth-first pre-order."""
    matches = []
    for branch in branches:
        if branch.category == category:
            matches.append(branch)
        matches.extend(branches_by_category(branch.sub_branches, category))
    return matches


def filter_branches(
    branches: List[ProductTreeBranch],
    predicate: Callable[[ProductTreeBranch], bool]
) -> List[ProductTreeBranch]:
    """Pruned copy of the tree keeping only branches matching ``predicate``.

    A rejected branch is dropped together with its subtree.
    """
    return [
        replace(branch, sub_branches=filter_branches(branch.sub_branches, predicate))
        for branch in branches
        if predicate(branch)
    ]


def version_ids_under(branch: ProductTreeBranch) -> List[str]:
    """Ids of all product versions in the subtree rooted at ``branch``."""
    return [
        b.id for b in branches_by_category([branch], BranchCategory.PRODUCT_VERSION)
    ]


def add_branch(
    branches: List[ProductTreeBranch],
    parent_id: Optional[str],
    branch: ProductTreeBranch
) -> List[ProductTreeBranch]:
    """Append ``branch`` to the children of ``parent_id``.

    Args:
        branches: Root branch list
        parent_id: Parent id, or None to add a root-level (vendor) branch
        branch: New branch; the caller supplies the right category for
            the depth it is added at

    Returns:
        New root branch list (unchanged if the parent does not exist)
    """
    if parent_id is None:
        return [*branches, branch]

    new_branches, changed = _rewrite(
        branches,
        parent_id,
        lambda parent: [replace(parent, sub_branches=[*parent.sub_branches, branch])]
    )
    if not changed:
        logger.warning(f"Cannot add branch {branch.id}: parent {parent_id} not found")
        return branches
    return new_branches


def update_branch(
    branches: List[ProductTreeBranch],
    branch: ProductTreeBranch
) -> List[ProductTreeBranch]:
    """Replace the branch with the same id, keeping its position."""
    new_branches, changed = _rewrite(branches, branch.id, lambda _: [branch])
    if not changed:
        logger.warning(f"Cannot update branch {branch.id}: not found")
        return branches
    return new_branches


def delete_branch(
    branches: List[ProductTreeBranch],
    branch_id: str
) -> List[ProductTreeBranch]:
    """Remove the subtree rooted at ``branch_id``."""
    new_branches, changed = _rewrite(branches, branch_id, lambda _: [])
    if not changed:
        logger.warning(f"Cannot delete branch {branch_id}: not found")
        return branches
    return new_branches


def _rewrite(
    branches: List[ProductTreeBranch],
    branch_id: str,
    substitute: Callable[[ProductTreeBranch], List[ProductTreeBranch]]
) -> Tuple[List[ProductTreeBranch], bool]:
    """Replace the first branch with ``branch_id`` by ``substitute(branch)``.

    Returns the new list and whether a replacement happened. Lists that do
    not contain the target are returned as-is.
    """
    for index, branch in enumerate(branches):
        if branch.id == branch_id:
            return branches[:index] + substitute(branch) + branches[index + 1:], True

        children, changed = _rewrite(branch.sub_branches, branch_id, substitute)
        if changed:
            new_branch = replace(branch, sub_branches=children)
            return branches[:index] + [new_branch] + branches[index + 1:], True

    return branches, False


def full_product_name(
    branches: List[ProductTreeBranch],
    branch_id: str,
    separator: str = " "
) -> str:
    """Compose a display name from the names along the path to a branch.

    Example:
        vendor "Acme" → product "Router" → version "1.2" gives "Acme Router 1.2"
    """
    found = find_branch_with_parents(branches, branch_id)
    if found is None:
        return ""
    return separator.join(b.name for b in found.lineage())


def relationship_full_product_name(
    branches: List[ProductTreeBranch],
    source_version_id: str,
    target_version_id: str,
    category: str,
    separator: str = " "
) -> str:
    """Name of a version pair, e.g. "Acme App 1.0 installed on Acme OS 11"."""
    return " ".join([
        full_product_name(branches, source_version_id, separator),
        category.replace("_", " ").lower(),
        full_product_name(branches, target_version_id, separator),
    ])


def branch_display_name(
    branches: List[ProductTreeBranch],
    branch: ProductTreeBranch,
    untitled: str = "Untitled product version",
    separator: str = " "
) -> Tuple[str, bool]:
    """Name to show for a branch and whether it is read-only.

    An explicit ``product_name`` that differs from the composed name wins and
    is read-only; so is the composed name of a branch with an
    identification helper. Empty names fall back to ``untitled``.

    Returns:
        Tuple of (name, is_readonly)
    """
    is_readonly = False
    name = branch.name

    if (
        branch.category == BranchCategory.PRODUCT_VERSION
        and branch.product_name is not None
        and full_product_name(branches, branch.id, separator) != branch.product_name
    ):
        is_readonly = True
        name = branch.product_name
    elif branch.identification_helper:
        is_readonly = True
        name = full_product_name(branches, branch.id, separator)

    if not name:
        name = untitled

    return name, is_readonly


def selectable_refs(
    branches: List[ProductTreeBranch],
    relationships: List[Relationship],
    separator: str = " "
) -> List[Dict[str, object]]:
    """Everything a vulnerability or remediation can refer to.

    Every product version and every relationship edge, as
    ``{category, full_product_name: {name, product_id}}``, sorted by name.
    """
    refs = []
    for version in branches_by_category(branches, BranchCategory.PRODUCT_VERSION):
        refs.append({
            "category": version.category.value,
            "full_product_name": {
                "name": full_product_name(branches, version.id, separator),
                "product_id": version.id
            }
        })

    for relationship in relationships:
        for edge in relationship.edges:
            refs.append({
                "category": relationship.category.value,
                "full_product_name": {
                    "name": relationship_full_product_name(
                        branches,
                        edge.product1_version_id,
                        edge.product2_version_id,
                        relationship.category.value,
                        separator
                    ),
                    "product_id": edge.relationship_id
                }
            })

    return sorted(refs, key=lambda r: r["full_product_name"]["name"].lower())


def grouped_selectable_refs(
    branches: List[ProductTreeBranch],
    relationships: List[Relationship],
    separator: str = " "
) -> Dict[str, List[Dict[str, object]]]:
    """``selectable_refs`` grouped by category."""
    groups: Dict[str, List[Dict[str, object]]] = {}
    for ref in selectable_refs(branches, relationships, separator):
        groups.setdefault(ref["category"], []).append(ref)
    return groups
