"""
Pydantic models of the CSAF wire substructures handled by this package.

Only ``product_tree.branches`` and ``product_tree.relationships`` are
modelled. Optional fields default to None and exported documents are dumped
with ``exclude_none`` so that absent keys stay absent.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from csaftree.core.model import RelationshipCategory


class WireBranchCategory(Enum):
    """Branch categories in the wire format.

    ``product_family`` only exists here; on import family branches are
    turned into ``ProductFamily`` entries.
    """
    VENDOR = "vendor"
    PRODUCT_NAME = "product_name"
    PRODUCT_VERSION = "product_version"
    PRODUCT_FAMILY = "product_family"


class WireProduct(BaseModel):
    """The ``product`` of a leaf branch (a CSAF full product name)."""

    name: Optional[str] = Field(
        default=None,
        description="Full name of the product version."
    )
    product_id: Optional[str] = Field(
        default=None,
        description="Token the rest of the document uses to reference the product."
    )
    product_identification_helper: Optional[Dict[str, Any]] = Field(
        default=None,
        description="CPE, PURL, hashes and other identifiers, carried as is."
    )


class WireBranch(BaseModel):
    """A node of ``product_tree.branches``.

    A node has either ``branches`` or ``product``, never both.
    """

    model_config = ConfigDict(extra="ignore")

    category: WireBranchCategory
    name: str = ""
    branches: Optional[List["WireBranch"]] = None
    product: Optional[WireProduct] = None


class WireFullProductName(BaseModel):
    name: str = ""
    product_id: str


class WireRelationship(BaseModel):
    """A flattened relationship between two product versions."""

    model_config = ConfigDict(extra="ignore")

    category: RelationshipCategory
    product_reference: str = Field(
        ...,
        description="Product id of the source version."
    )
    relates_to_product_reference: str = Field(
        ...,
        description="Product id of the target version."
    )
    full_product_name: WireFullProductName


WireBranch.model_rebuild()


def dump_branches(branches: List[WireBranch]) -> List[Dict[str, Any]]:
    """JSON-ready dictionaries without unset keys."""
    return [b.model_dump(mode="json", exclude_none=True) for b in branches]


def dump_relationships(relationships: List[WireRelationship]) -> List[Dict[str, Any]]:
    return [r.model_dump(mode="json", exclude_none=True) for r in relationships]
