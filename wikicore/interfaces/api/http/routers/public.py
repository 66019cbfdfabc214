"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/public.py
===============================================================================

Class/Module:
    Public Share Router (rutas sin autenticación)

Responsibilities:
    - Lectura pública de un documento compartido (token + password opcional).
    - Listado de hijos visibles por el mismo enlace.

Collaborators:
    - GetPublicDocumentUseCase / ListPublicChildrenUseCase
    - dependencies.share_credentials (token por query, password por header)

Notes:
    - Estas rutas nunca consultan la identidad del request: el único gate es
      el ShareStateMachine (vía RequestGuardPipeline en modo PUBLIC_SHARE).
    - Un enlace vencido responde 410; cualquier otra denegación, 403.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from wikicore.application.usecases import (
    GetPublicDocumentUseCase,
    ListPublicChildrenUseCase,
)
from wikicore.container import (
    get_list_public_children_use_case,
    get_public_document_use_case,
)

from ..dependencies import ShareCredentials, share_credentials
from ..error_mapping import raise_document_error
from ..schemas.documents import PublicDocumentRes, PublicDocumentsListRes

router = APIRouter(prefix="/public/documents", tags=["public"])


@router.get("/{document_id}", response_model=PublicDocumentRes)
def get_public_document(
    document_id: UUID,
    credentials: ShareCredentials = Depends(share_credentials),
    use_case: GetPublicDocumentUseCase = Depends(get_public_document_use_case),
):
    result = use_case.execute(document_id, credentials.token, credentials.password)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return PublicDocumentRes.from_entity(result.document)


@router.get("/{document_id}/children", response_model=PublicDocumentsListRes)
def list_public_children(
    document_id: UUID,
    credentials: ShareCredentials = Depends(share_credentials),
    use_case: ListPublicChildrenUseCase = Depends(get_list_public_children_use_case),
):
    result = use_case.execute(document_id, credentials.token, credentials.password)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return PublicDocumentsListRes(
        documents=[PublicDocumentRes.from_entity(doc) for doc in result.documents]
    )
