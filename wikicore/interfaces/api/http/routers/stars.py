"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/stars.py
===============================================================================

Class/Module:
    Star Router

Responsibilities:
    - Toggle / estado de stars sobre wikis y documentos.
    - Listados de wikis y documentos marcados (re-filtrados por autoridad).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wikicore.application.usecases import (
    GetStarStatusUseCase,
    ListStarredDocumentsUseCase,
    ListStarredWikisUseCase,
    ToggleStarUseCase,
)
from wikicore.container import (
    get_list_starred_documents_use_case,
    get_list_starred_wikis_use_case,
    get_star_status_use_case,
    get_toggle_star_use_case,
)

from ..dependencies import current_actor
from ..error_mapping import raise_document_error
from ..schemas.documents import DocumentRes, DocumentsListRes
from ..schemas.stars import StarredWikisRes, StarStatusRes, ToggleStarReq, ToggleStarRes
from ..schemas.wikis import WikiRes

router = APIRouter(prefix="/stars", tags=["stars"])


@router.post("/toggle", response_model=ToggleStarRes)
def toggle_star(
    req: ToggleStarReq,
    use_case: ToggleStarUseCase = Depends(get_toggle_star_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(actor_id, req.wiki_id, req.document_id)
    if result.error is not None:
        raise_document_error(
            result.error, wiki_id=req.wiki_id, document_id=req.document_id
        )
    return ToggleStarRes(starred=result.starred)


@router.get("/status", response_model=StarStatusRes)
def star_status(
    wiki_id: UUID = Query(...),
    document_id: UUID | None = Query(None),
    use_case: GetStarStatusUseCase = Depends(get_star_status_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(actor_id, wiki_id, document_id)
    if result.error is not None:
        raise_document_error(result.error)
    return StarStatusRes(starred=result.starred)


@router.get("/wikis", response_model=StarredWikisRes)
def list_starred_wikis(
    use_case: ListStarredWikisUseCase = Depends(get_list_starred_wikis_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(actor_id)
    if result.error is not None:
        raise_document_error(result.error)
    return StarredWikisRes(wikis=[WikiRes.from_entity(w) for w in result.wikis])


@router.get("/documents", response_model=DocumentsListRes)
def list_starred_documents(
    wiki_id: UUID | None = Query(None),
    use_case: ListStarredDocumentsUseCase = Depends(
        get_list_starred_documents_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(actor_id, wiki_id=wiki_id)
    if result.error is not None:
        raise_document_error(result.error)
    return DocumentsListRes(
        documents=[DocumentRes.from_entity(doc) for doc in result.documents]
    )
