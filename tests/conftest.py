"""
Shared sample product trees for the test suite.
"""

import pytest

from csaftree.core.model import (
    BranchCategory,
    ProductFamily,
    ProductTreeBranch,
    ProductType,
    Relationship,
    RelationshipCategory,
    RelationshipEdge
)


def vendor(id, name, *products):
    return ProductTreeBranch(
        id=id, category=BranchCategory.VENDOR, name=name, sub_branches=list(products)
    )


def product(id, name, *versions, family_id=None):
    return ProductTreeBranch(
        id=id,
        category=BranchCategory.PRODUCT_NAME,
        name=name,
        sub_branches=list(versions),
        type=ProductType.SOFTWARE,
        family_id=family_id
    )


def version(id, name, product_name=None, identification_helper=None):
    return ProductTreeBranch(
        id=id,
        category=BranchCategory.PRODUCT_VERSION,
        name=name,
        product_name=product_name,
        identification_helper=identification_helper
    )


@pytest.fixture
def families():
    """Networking → Routers."""
    return [
        ProductFamily(id="fam-net", name="Networking"),
        ProductFamily(id="fam-routers", name="Routers", parent_id="fam-net"),
    ]


@pytest.fixture
def product_tree():
    """Three vendors covering families, explicit names and empty nodes.

    Acme
      Router (family Routers): 1.0, 2.0 (explicit name)
      Firmware: 3.1 (with CPE)
      Cloud (no versions)
    Globex
      OS: 11
    Initech (no products)
    """
    return [
        vendor(
            "acme", "Acme",
            product(
                "router", "Router",
                version("router-1.0", "1.0"),
                version("router-2.0", "2.0", product_name="Acme Router 2.0 LTS"),
                family_id="fam-routers"
            ),
            product(
                "firmware", "Firmware",
                version(
                    "firmware-3.1", "3.1",
                    identification_helper={"cpe": "cpe:2.3:o:acme:firmware:3.1:*:*:*:*:*:*:*"}
                )
            ),
            product("cloud", "Cloud")
        ),
        vendor(
            "globex", "Globex",
            product("os", "OS", version("os-11", "11"))
        ),
        vendor("initech", "Initech"),
    ]


@pytest.fixture
def relationships():
    """Router and Firmware versions installed on OS 11."""
    return [
        Relationship(
            id="rel-router-os",
            category=RelationshipCategory.INSTALLED_ON,
            product_id1="router",
            product_id2="os",
            name="Router on OS",
            edges=[
                RelationshipEdge("router-1.0", "os-11", "CSAFRID-0001"),
                RelationshipEdge("router-2.0", "os-11", "CSAFRID-0002"),
            ]
        ),
        Relationship(
            id="rel-firmware-os",
            category=RelationshipCategory.DEFAULT_COMPONENT_OF,
            product_id1="firmware",
            product_id2="os",
            name="Firmware in OS",
            edges=[RelationshipEdge("firmware-3.1", "os-11", "CSAFRID-0003")]
        ),
        Relationship(
            id="rel-router-firmware",
            category=RelationshipCategory.INSTALLED_WITH,
            product_id1="router",
            product_id2="firmware",
            name="Router with Firmware",
            edges=[RelationshipEdge("router-1.0", "firmware-3.1", "CSAFRID-0004")]
        ),
    ]
