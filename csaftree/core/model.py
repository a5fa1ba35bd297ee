"""
Internal document model for the product tree.

This module defines the data structures the editor works on: the owning
vendor → product → version tree, the product family overlay, and the
relationships between products.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from csaftree.core.identity import generate_id


class BranchCategory(Enum):
    """Categories of nodes in the internal product tree.

    The wire format additionally knows ``product_family``; family nodes
    never appear in the internal tree.
    """
    VENDOR = "vendor"
    PRODUCT_NAME = "product_name"
    PRODUCT_VERSION = "product_version"


class ProductType(Enum):
    """Kind of product, meaningful on ``product_name`` nodes only."""
    SOFTWARE = "Software"
    HARDWARE = "Hardware"


class RelationshipCategory(Enum):
    """CSAF relationship categories, in their canonical order."""
    DEFAULT_COMPONENT_OF = "default_component_of"
    EXTERNAL_COMPONENT_OF = "external_component_of"
    INSTALLED_ON = "installed_on"
    INSTALLED_WITH = "installed_with"
    OPTIONAL_COMPONENT_OF = "optional_component_of"


@dataclass
class ProductTreeBranch:
    """A node of the product tree.

    Vendors contain products, products contain versions. Children are owned:
    removing a node removes its subtree.

    Attributes:
        id: Stable unique identifier
        category: Node category
        name: Display name of this level (e.g. "Acme", "Router", "1.2")
        description: Free text
        sub_branches: Ordered child nodes
        type: Software or hardware, product_name nodes only
        product_name: Explicit full product name, product_version nodes only
        identification_helper: Opaque CPE/PURL/hashes data, versions only
        family_id: Id of the product family, product_name nodes only
    """
    id: str
    category: BranchCategory
    name: str = ""
    description: str = ""
    sub_branches: List["ProductTreeBranch"] = field(default_factory=list)
    type: Optional[ProductType] = None
    product_name: Optional[str] = None
    identification_helper: Optional[Dict[str, Any]] = None
    family_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize branch and its subtree to a dictionary."""
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "sub_branches": [b.to_dict() for b in self.sub_branches],
            "type": self.type.value if self.type else None,
            "product_name": self.product_name,
            "identification_helper": self.identification_helper,
            "family_id": self.family_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductTreeBranch":
        """Create from dictionary representation."""
        data = data.copy()
        data["category"] = BranchCategory(data["category"])
        if data.get("type"):
            data["type"] = ProductType(data["type"])
        else:
            data["type"] = None
        data["sub_branches"] = [
            cls.from_dict(b) for b in data.get("sub_branches", [])
        ]
        return cls(**data)


@dataclass
class ProductTreeBranchWithParents:
    """A branch found in the tree together with its chain of ancestors.

    ``parent`` is ``None`` for root-level branches.
    """
    branch: ProductTreeBranch
    parent: Optional["ProductTreeBranchWithParents"] = None

    @property
    def id(self) -> str:
        return self.branch.id

    @property
    def name(self) -> str:
        return self.branch.name

    @property
    def category(self) -> BranchCategory:
        return self.branch.category

    def lineage(self) -> List[ProductTreeBranch]:
        """Branches from the root down to (and including) this one."""
        chain = []
        current = self
        while current is not None:
            chain.append(current.branch)
            current = current.parent
        chain.reverse()
        return chain


@dataclass
class ProductFamily:
    """A product family.

    Families form their own forest through ``parent_id`` and are referenced
    by products via ``ProductTreeBranch.family_id``.
    """
    id: str
    name: str = ""
    parent_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent_id": self.parent_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductFamily":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            parent_id=data.get("parent_id")
        )


@dataclass
class RelationshipEdge:
    """One version pair of a relationship.

    ``relationship_id`` is the wire-format product id of this pair.
    """
    product1_version_id: str
    product2_version_id: str
    relationship_id: str

    def pair(self) -> tuple:
        return (self.product1_version_id, self.product2_version_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product1_version_id": self.product1_version_id,
            "product2_version_id": self.product2_version_id,
            "relationship_id": self.relationship_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelationshipEdge":
        return cls(**data)


@dataclass
class Relationship:
    """A categorized relationship from one product to another.

    Example:
        relationship = Relationship(
            id="r1",
            category=RelationshipCategory.INSTALLED_ON,
            product_id1="app",
            product_id2="os",
            name="App 1.0 installed on OS 11",
            edges=[RelationshipEdge("app-1.0", "os-11", "CSAFRID-0001")]
        )
    """
    id: str
    category: RelationshipCategory
    product_id1: str = ""
    product_id2: str = ""
    name: str = ""
    edges: List[RelationshipEdge] = field(default_factory=list)

    def has_pair(self, product1_version_id: str, product2_version_id: str) -> bool:
        """Whether an edge for this exact version pair exists."""
        return any(
            e.pair() == (product1_version_id, product2_version_id)
            for e in self.edges
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "product_id1": self.product_id1,
            "product_id2": self.product_id2,
            "name": self.name,
            "edges": [e.to_dict() for e in self.edges]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        data = data.copy()
        data["category"] = RelationshipCategory(data["category"])
        data["edges"] = [RelationshipEdge.from_dict(e) for e in data.get("edges", [])]
        return cls(**data)


def default_product_tree_branch(category: BranchCategory) -> ProductTreeBranch:
    """Create an empty branch with a fresh id.

    Products default to software; other categories carry no type.
    """
    return ProductTreeBranch(
        id=generate_id(),
        category=category,
        type=ProductType.SOFTWARE if category == BranchCategory.PRODUCT_NAME else None
    )


def default_product_family() -> ProductFamily:
    """Create an unnamed root family with a fresh id."""
    return ProductFamily(id=generate_id())


def default_relationship() -> Relationship:
    """Create an empty ``installed_on`` relationship with a fresh id."""
    return Relationship(id=generate_id(), category=RelationshipCategory.INSTALLED_ON)
