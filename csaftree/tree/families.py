"""
Product family overlay.

Families live in their own flat list and link to their parent by id. They are
independent of the product tree: deleting a family leaves products that
reference it with a dangling ``family_id``.
"""

import logging
from typing import List, Optional

from csaftree.core.model import BranchCategory, ProductFamily, ProductTreeBranch
from csaftree.tree.branches import branches_by_category

logger = logging.getLogger(__name__)


def find_family(
    families: List[ProductFamily],
    family_id: Optional[str]
) -> Optional[ProductFamily]:
    """Look up a family by id; None for unknown or empty ids."""
    if not family_id:
        return None
    for family in families:
        if family.id == family_id:
            return family
    return None


def add_family(
    families: List[ProductFamily],
    family: ProductFamily
) -> List[ProductFamily]:
    return [*families, family]


def update_family(
    families: List[ProductFamily],
    family: ProductFamily
) -> List[ProductFamily]:
    """Replace the family with the same id."""
    if find_family(families, family.id) is None:
        logger.warning(f"Cannot update family {family.id}: not found")
        return families
    return [family if f.id == family.id else f for f in families]


def delete_family(
    families: List[ProductFamily],
    family_id: str
) -> List[ProductFamily]:
    """Remove a family. Child families and products keep their references."""
    if find_family(families, family_id) is None:
        logger.warning(f"Cannot delete family {family_id}: not found")
        return families
    return [f for f in families if f.id != family_id]


def family_chain(
    family: ProductFamily,
    families: List[ProductFamily]
) -> List[ProductFamily]:
    """Resolve the ancestors of a family.

    Walks the ``parent_id`` links and stops at a family without parent, at a
    parent id that is not in ``families``, or when a family is visited twice.

    Args:
        family: Family to start from
        families: All families of the document

    Returns:
        Families ordered from the root ancestor down to ``family``
    """
    chain = [family]
    seen = {family.id}
    current = family

    while current.parent_id is not None:
        parent = find_family(families, current.parent_id)
        if parent is None:
            logger.warning(
                f"Family {current.id} references unknown parent {current.parent_id}"
            )
            break
        if parent.id in seen:
            logger.warning(f"Cycle in product family chain at family {parent.id}")
            break
        chain.insert(0, parent)
        seen.add(parent.id)
        current = parent

    return chain


def family_chain_string(
    family: ProductFamily,
    families: List[ProductFamily],
    separator: str = " / "
) -> str:
    """Breadcrumb of a family, e.g. "Laptops / Business / X1"."""
    return separator.join(f.name for f in family_chain(family, families))


def branches_by_family(
    branches: List[ProductTreeBranch],
    family_id: str
) -> List[ProductTreeBranch]:
    """Products that reference a family."""
    return [
        b for b in branches_by_category(branches, BranchCategory.PRODUCT_NAME)
        if b.family_id == family_id
    ]
