"""
csaf-tree API - FastAPI backend

Exposes one in-memory document session over REST so that an editor frontend
can read and mutate the product tree, families and relationships, and
import/export the CSAF ``product_tree``.

Run with:
    uvicorn csaftree.api:app --reload
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from csaftree import __version__
from csaftree.config import SessionConfig, configure_logging
from csaftree.core.identity import generate_id
from csaftree.core.model import (
    BranchCategory,
    ProductFamily,
    ProductTreeBranch,
    ProductType,
    RelationshipCategory,
    default_relationship
)
from csaftree.session import DocumentSession

app = FastAPI(
    title="csaf-tree API",
    description="Product tree, product families and relationships of a CSAF advisory.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session (lazy loading)
_session = None


def get_session() -> DocumentSession:
    global _session
    if _session is None:
        config = SessionConfig.from_env()
        configure_logging(config)
        _session = DocumentSession(config=config)
    return _session


# ============== Request Models ==============

class BranchFields(BaseModel):
    category: BranchCategory
    name: str = ""
    description: str = ""
    type: Optional[ProductType] = None
    product_name: Optional[str] = None
    identification_helper: Optional[Dict[str, Any]] = None
    family_id: Optional[str] = None


class CreateBranchRequest(BranchFields):
    parent_id: Optional[str] = None


class FamilyRequest(BaseModel):
    name: str = ""
    parent_id: Optional[str] = None


class RelationshipRequest(BaseModel):
    category: RelationshipCategory = RelationshipCategory.INSTALLED_ON
    product_id1: str
    product_id2: str
    name: str = ""
    product1_version_ids: List[str] = []
    product2_version_ids: List[str] = []


def _branch_or_404(session: DocumentSession, branch_id: str) -> ProductTreeBranch:
    branch = session.find(branch_id)
    if branch is None:
        raise HTTPException(status_code=404, detail=f"Branch {branch_id} not found")
    return branch


def _family_or_404(session: DocumentSession, family_id: str) -> ProductFamily:
    family = session.find_family(family_id)
    if family is None:
        raise HTTPException(status_code=404, detail=f"Family {family_id} not found")
    return family


# ============== Endpoints ==============

@app.get("/")
async def root():
    """API health check and info."""
    session = get_session()
    return {
        "name": "csaf-tree API",
        "version": __version__,
        "status": "healthy",
        "session": {
            "vendors": len(session.products),
            "families": len(session.families),
            "relationships": len(session.relationships),
        }
    }


@app.get("/branches")
async def list_branches(category: Optional[BranchCategory] = None):
    """Root branches, or every branch of a category."""
    session = get_session()
    if category is None:
        return [b.to_dict() for b in session.products]
    return [b.to_dict() for b in session.by_category(category)]


@app.get("/branches/{branch_id}")
async def get_branch(branch_id: str):
    session = get_session()
    branch = _branch_or_404(session, branch_id)
    name, readonly = session.display_name(branch)
    return {
        "branch": branch.to_dict(),
        "display_name": name,
        "display_name_readonly": readonly,
        "full_product_name": session.full_product_name(branch_id),
    }


@app.get("/branches/{branch_id}/lineage")
async def get_branch_lineage(branch_id: str):
    """Ancestors of a branch from the root down to the branch itself."""
    session = get_session()
    found = session.find_with_parents(branch_id)
    if found is None:
        raise HTTPException(status_code=404, detail=f"Branch {branch_id} not found")
    return [
        {"id": b.id, "category": b.category.value, "name": b.name}
        for b in found.lineage()
    ]


@app.post("/branches", status_code=201)
async def create_branch(request: CreateBranchRequest):
    session = get_session()
    if request.parent_id is not None:
        _branch_or_404(session, request.parent_id)

    branch = ProductTreeBranch(
        id=generate_id(),
        **request.model_dump(exclude={"parent_id"})
    )
    session.add(request.parent_id, branch)
    return branch.to_dict()


@app.put("/branches/{branch_id}")
async def update_branch(branch_id: str, request: BranchFields):
    session = get_session()
    existing = _branch_or_404(session, branch_id)
    # Category and children stay; the tree level of a node is fixed
    branch = ProductTreeBranch(
        id=branch_id,
        category=existing.category,
        sub_branches=existing.sub_branches,
        **request.model_dump(exclude={"category"})
    )
    session.update(branch)
    return branch.to_dict()


@app.delete("/branches/{branch_id}", status_code=204)
async def delete_branch(branch_id: str):
    session = get_session()
    _branch_or_404(session, branch_id)
    session.delete(branch_id)


@app.get("/refs")
async def get_selectable_refs(grouped: bool = False):
    """Product versions and relationship edges that can be referenced."""
    session = get_session()
    if grouped:
        return session.grouped_selectable_refs()
    return session.selectable_refs()


@app.get("/families")
async def list_families():
    session = get_session()
    return [
        {**f.to_dict(), "chain": session.family_chain_string(f)}
        for f in session.families
    ]


@app.post("/families", status_code=201)
async def create_family(request: FamilyRequest):
    session = get_session()
    if request.parent_id is not None:
        _family_or_404(session, request.parent_id)
    family = ProductFamily(id=generate_id(), name=request.name, parent_id=request.parent_id)
    session.add_family(family)
    return family.to_dict()


@app.put("/families/{family_id}")
async def update_family(family_id: str, request: FamilyRequest):
    session = get_session()
    _family_or_404(session, family_id)
    family = ProductFamily(id=family_id, name=request.name, parent_id=request.parent_id)
    session.update_family(family)
    return family.to_dict()


@app.delete("/families/{family_id}", status_code=204)
async def delete_family(family_id: str):
    session = get_session()
    _family_or_404(session, family_id)
    session.delete_family(family_id)


@app.get("/families/{family_id}/chain")
async def get_family_chain(family_id: str):
    session = get_session()
    family = _family_or_404(session, family_id)
    return {
        "chain": [f.to_dict() for f in session.family_chain(family)],
        "label": session.family_chain_string(family),
    }


@app.get("/relationships")
async def list_relationships(source_version: Optional[str] = None):
    session = get_session()
    if source_version is None:
        return [r.to_dict() for r in session.relationships]
    return [r.to_dict() for r in session.by_source_version(source_version)]


@app.get("/relationships/grouped")
async def group_relationships(source_version: Optional[str] = None):
    """Relationships grouped by category, in canonical category order."""
    session = get_session()
    relationships = None
    if source_version is not None:
        relationships = session.by_source_version(source_version)
    groups = session.group_by_category(relationships)
    return {
        category.value: [r.to_dict() for r in members]
        for category, members in groups.items()
    }


@app.post("/relationships", status_code=201)
async def create_relationship(request: RelationshipRequest):
    session = get_session()
    relationship = default_relationship()
    relationship.category = request.category
    relationship.product_id1 = request.product_id1
    relationship.product_id2 = request.product_id2
    relationship.name = request.name
    relationship = session.set_version_pairs(
        relationship, request.product1_version_ids, request.product2_version_ids
    )
    return relationship.to_dict()


@app.put("/relationships/{relationship_id}")
async def update_relationship(relationship_id: str, request: RelationshipRequest):
    session = get_session()
    existing = next((r for r in session.relationships if r.id == relationship_id), None)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Relationship {relationship_id} not found")

    relationship = session.set_version_pairs(
        replace(
            existing,
            category=request.category,
            product_id1=request.product_id1,
            product_id2=request.product_id2,
            name=request.name
        ),
        request.product1_version_ids,
        request.product2_version_ids
    )
    return relationship.to_dict()


@app.delete("/relationships/{relationship_id}", status_code=204)
async def delete_relationship(relationship_id: str):
    session = get_session()
    existing = next((r for r in session.relationships if r.id == relationship_id), None)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Relationship {relationship_id} not found")
    session.delete_relationship(existing)


@app.get("/export")
async def export_product_tree():
    """The ``product_tree`` object of the current document."""
    return get_session().export()


@app.post("/import")
async def import_document(document: Dict[str, Any] = Body(...)):
    """Replace the session with the product tree of a CSAF document."""
    session = get_session()
    failed = []
    try:
        session.import_document(
            document,
            on_error=lambda record, reason: failed.append({"record": record, "reason": reason})
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "vendors": len(session.products),
        "families": len(session.families),
        "relationships": len(session.relationships),
        "failed_relationships": failed,
    }


@app.post("/reset", status_code=204)
async def reset_session():
    get_session().reset()
