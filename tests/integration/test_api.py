"""
Integration tests for the REST API.
"""

import pytest
from fastapi.testclient import TestClient

import csaftree.api as api
from csaftree.session import DocumentSession


@pytest.fixture
def client(product_tree, families, relationships):
    api._session = DocumentSession(product_tree, families, relationships)
    yield TestClient(api.app)
    api._session = None


class TestBranchEndpoints:
    """Tests for /branches."""

    def test_root(self, client):
        """Test the health check reports session counts."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["session"] == {"vendors": 3, "families": 2, "relationships": 3}

    def test_list_by_category(self, client):
        """Test listing every branch of a category."""
        response = client.get("/branches", params={"category": "product_version"})
        assert [b["id"] for b in response.json()] == [
            "router-1.0", "router-2.0", "firmware-3.1", "os-11"
        ]

    def test_get_branch(self, client):
        """Test a branch comes with its names."""
        body = client.get("/branches/router-2.0").json()

        assert body["display_name"] == "Acme Router 2.0 LTS"
        assert body["display_name_readonly"] is True
        assert body["full_product_name"] == "Acme Router 2.0"

    def test_get_unknown_branch(self, client):
        """Test unknown branches are 404."""
        assert client.get("/branches/nope").status_code == 404

    def test_lineage(self, client):
        """Test the lineage runs from the vendor down."""
        body = client.get("/branches/os-11/lineage").json()
        assert [b["id"] for b in body] == ["globex", "os", "os-11"]

    def test_create_and_update(self, client):
        """Test creating a version and renaming it."""
        response = client.post("/branches", json={
            "parent_id": "os", "category": "product_version", "name": "12"
        })
        assert response.status_code == 201
        branch_id = response.json()["id"]

        response = client.put(f"/branches/{branch_id}", json={
            "category": "product_version", "name": "12.1"
        })
        assert response.status_code == 200
        assert client.get(f"/branches/{branch_id}").json()["full_product_name"] == "Globex OS 12.1"

    def test_create_unknown_parent(self, client):
        """Test creating below an unknown parent is 404."""
        response = client.post("/branches", json={
            "parent_id": "nope", "category": "product_version"
        })
        assert response.status_code == 404

    def test_update_keeps_children(self, client):
        """Test renaming a product keeps its versions."""
        client.put("/branches/os", json={"category": "product_name", "name": "OS X"})

        body = client.get("/branches/os").json()
        assert [b["id"] for b in body["branch"]["sub_branches"]] == ["os-11"]

    def test_update_keeps_category(self, client):
        """Test a product with versions cannot be turned into a version."""
        response = client.put("/branches/os", json={"category": "product_version", "name": "OS"})

        assert response.json()["category"] == "product_name"
        versions = client.get("/branches", params={"category": "product_version"}).json()
        assert "os" not in [b["id"] for b in versions]

    def test_delete_cascades(self, client):
        """Test deleting a product removes its relationships."""
        assert client.delete("/branches/router").status_code == 204

        relationships = client.get("/relationships").json()
        assert [r["id"] for r in relationships] == ["rel-firmware-os"]


class TestFamilyEndpoints:
    """Tests for /families."""

    def test_list_with_chain(self, client):
        """Test families are listed with their breadcrumb."""
        body = client.get("/families").json()
        assert [f["chain"] for f in body] == ["Networking", "Networking / Routers"]

    def test_create_nested(self, client):
        """Test creating a family under an existing one."""
        response = client.post("/families", json={"name": "Edge", "parent_id": "fam-routers"})
        assert response.status_code == 201

        family_id = response.json()["id"]
        chain = client.get(f"/families/{family_id}/chain").json()
        assert chain["label"] == "Networking / Routers / Edge"

    def test_create_unknown_parent(self, client):
        """Test an unknown parent family is 404."""
        response = client.post("/families", json={"name": "x", "parent_id": "nope"})
        assert response.status_code == 404

    def test_delete(self, client):
        """Test deleting a family."""
        assert client.delete("/families/fam-routers").status_code == 204
        assert client.get("/families/fam-routers/chain").status_code == 404


class TestRelationshipEndpoints:
    """Tests for /relationships."""

    def test_grouped(self, client):
        """Test grouping keys follow category order."""
        body = client.get("/relationships/grouped").json()
        assert list(body) == ["default_component_of", "installed_on", "installed_with"]

    def test_grouped_by_source(self, client):
        """Test grouping the relationships of one source version."""
        body = client.get("/relationships/grouped", params={"source_version": "firmware-3.1"}).json()
        assert list(body) == ["default_component_of"]

    def test_create(self, client):
        """Test creating a relationship expands the version pairs."""
        response = client.post("/relationships", json={
            "category": "optional_component_of",
            "product_id1": "firmware",
            "product_id2": "router",
            "product1_version_ids": ["firmware-3.1"],
            "product2_version_ids": ["router-1.0", "router-2.0"],
        })

        assert response.status_code == 201
        edges = response.json()["edges"]
        assert [e["relationship_id"] for e in edges] == ["CSAFRID-0005", "CSAFRID-0006"]

    def test_update(self, client):
        """Test updating keeps ids of existing pairs."""
        response = client.put("/relationships/rel-router-os", json={
            "category": "installed_on",
            "product_id1": "router",
            "product_id2": "os",
            "name": "Routers on OS",
            "product1_version_ids": ["router-2.0"],
            "product2_version_ids": ["os-11"],
        })

        body = response.json()
        assert body["name"] == "Routers on OS"
        assert [e["relationship_id"] for e in body["edges"]] == ["CSAFRID-0002"]

    def test_delete_unknown(self, client):
        """Test deleting an unknown relationship is 404."""
        assert client.delete("/relationships/nope").status_code == 404


class TestWireEndpoints:
    """Tests for /export and /import."""

    def test_export_import(self, client):
        """Test an exported tree can be imported again."""
        exported = client.get("/export").json()
        assert exported["branches"][0]["branches"][0]["category"] == "product_family"

        client.post("/reset")
        assert client.get("/").json()["session"]["vendors"] == 0

        body = client.post("/import", json={"product_tree": exported}).json()
        assert body == {
            "vendors": 3,
            "families": 2,
            "relationships": 3,
            "failed_relationships": [],
        }

    def test_import_reports_failures(self, client):
        """Test unresolved records are returned."""
        body = client.post("/import", json={
            "branches": [],
            "relationships": [{
                "category": "installed_on",
                "product_reference": "a",
                "relates_to_product_reference": "b",
                "full_product_name": {"name": "x", "product_id": "R1"},
            }],
        }).json()

        assert body["failed_relationships"][0]["reason"] == "unresolved product reference"

    def test_import_invalid_tree(self, client):
        """Test an invalid branch list is rejected."""
        response = client.post("/import", json={"branches": [{"category": "platform"}]})
        assert response.status_code == 422

    def test_refs_grouped(self, client):
        """Test grouped selectable references."""
        body = client.get("/refs", params={"grouped": True}).json()
        assert len(body["product_version"]) == 4
