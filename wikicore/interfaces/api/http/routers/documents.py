"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/documents.py
===============================================================================

Class/Module:
    Document Router (rutas autenticadas)

Responsibilities:
    - Exponer endpoints HTTP del árbol de documentos: detalle, edición,
      hijos, move, borrado en cascada, capacidad efectiva, grants, share,
      documentos recientes e historial de versiones.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir DocumentError -> RFC7807 (error_mapping).

Collaborators:
    - wikicore.application.usecases (casos de uso detrás del guard)
    - wikicore.container (factories DI)
    - dependencies.current_actor (JWT opcional)
    - schemas.documents (DTOs Pydantic)

Notes:
    - Ningún endpoint decide autoridad: todo pasa por el RequestGuardPipeline
      dentro del caso de uso.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from wikicore.application.sharing import ShareRequest
from wikicore.application.usecases import (
    DeleteDocumentUseCase,
    DocumentMemberInput,
    GetDocumentUseCase,
    GetEffectiveCapabilityUseCase,
    GrantDocumentMemberUseCase,
    ListChildDocumentsUseCase,
    ListDocumentMembersUseCase,
    ListDocumentVersionsUseCase,
    ListRecentDocumentsUseCase,
    MoveDocumentUseCase,
    RevokeDocumentMemberUseCase,
    ShareDocumentUseCase,
    UpdateDocumentInput,
    UpdateDocumentMemberUseCase,
    UpdateDocumentUseCase,
)
from wikicore.container import (
    get_delete_document_use_case,
    get_effective_capability_use_case,
    get_get_document_use_case,
    get_grant_document_member_use_case,
    get_list_child_documents_use_case,
    get_list_document_members_use_case,
    get_list_document_versions_use_case,
    get_list_recent_documents_use_case,
    get_move_document_use_case,
    get_revoke_document_member_use_case,
    get_share_document_use_case,
    get_update_document_member_use_case,
    get_update_document_use_case,
)

from ..dependencies import current_actor
from ..error_mapping import raise_document_error
from ..schemas.documents import (
    CapabilityRes,
    DeleteDocumentRes,
    DocumentMemberReq,
    DocumentMemberRes,
    DocumentMembersRes,
    DocumentRes,
    DocumentsListRes,
    DocumentVersionRes,
    DocumentVersionsRes,
    MoveDocumentReq,
    ShareDocumentReq,
    ShareDocumentRes,
    UpdateDocumentMemberReq,
    UpdateDocumentReq,
)

router = APIRouter(prefix="/documents", tags=["documents"])


# =============================================================================
# Documento
# =============================================================================


@router.get("/recent", response_model=DocumentsListRes)
def list_recent_documents(
    use_case: ListRecentDocumentsUseCase = Depends(get_list_recent_documents_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    """Declarada antes de /{document_id}: "recent" no es un UUID."""
    result = use_case.execute(actor_id)
    if result.error is not None:
        raise_document_error(result.error)
    return DocumentsListRes(
        documents=[DocumentRes.from_entity(doc) for doc in result.documents]
    )


@router.get("/{document_id}", response_model=DocumentRes)
def get_document(
    document_id: UUID,
    use_case: GetDocumentUseCase = Depends(get_get_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentRes.from_entity(result.document)


@router.patch("/{document_id}", response_model=DocumentRes)
def update_document(
    document_id: UUID,
    req: UpdateDocumentReq,
    use_case: UpdateDocumentUseCase = Depends(get_update_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        UpdateDocumentInput(
            document_id=document_id, title=req.title, content=req.content
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentRes.from_entity(result.document)


@router.delete("/{document_id}", response_model=DeleteDocumentRes)
def delete_document(
    document_id: UUID,
    use_case: DeleteDocumentUseCase = Depends(get_delete_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DeleteDocumentRes(deleted_ids=result.deleted_ids)


@router.get("/{document_id}/versions", response_model=DocumentVersionsRes)
def list_document_versions(
    document_id: UUID,
    use_case: ListDocumentVersionsUseCase = Depends(
        get_list_document_versions_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentVersionsRes(
        document_id=document_id,
        versions=[DocumentVersionRes.from_entity(v) for v in result.versions],
    )


@router.get("/{document_id}/children", response_model=DocumentsListRes)
def list_children(
    document_id: UUID,
    use_case: ListChildDocumentsUseCase = Depends(get_list_child_documents_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentsListRes(
        documents=[DocumentRes.from_entity(doc) for doc in result.documents]
    )


@router.post("/{document_id}/move", response_model=DocumentRes)
def move_document(
    document_id: UUID,
    req: MoveDocumentReq,
    use_case: MoveDocumentUseCase = Depends(get_move_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, req.parent_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentRes.from_entity(result.document)


@router.get("/{document_id}/capability", response_model=CapabilityRes)
def get_effective_capability(
    document_id: UUID,
    use_case: GetEffectiveCapabilityUseCase = Depends(
        get_effective_capability_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return CapabilityRes(
        document_id=document_id,
        capability=result.capability,
        matched_rule=result.matched_rule,
    )


# =============================================================================
# Grants (miembros del documento)
# =============================================================================


@router.get("/{document_id}/members", response_model=DocumentMembersRes)
def list_document_members(
    document_id: UUID,
    use_case: ListDocumentMembersUseCase = Depends(
        get_list_document_members_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentMembersRes(
        members=[DocumentMemberRes.from_entity(grant) for grant in result.members]
    )


@router.post(
    "/{document_id}/members",
    response_model=DocumentMemberRes,
    status_code=status.HTTP_201_CREATED,
)
def add_document_member(
    document_id: UUID,
    req: DocumentMemberReq,
    use_case: GrantDocumentMemberUseCase = Depends(get_grant_document_member_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        DocumentMemberInput(
            document_id=document_id, user_id=req.user_id, capability=req.capability
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentMemberRes.from_entity(result.member)


@router.patch("/{document_id}/members/{user_id}", response_model=DocumentMemberRes)
def update_document_member(
    document_id: UUID,
    user_id: UUID,
    req: UpdateDocumentMemberReq,
    use_case: UpdateDocumentMemberUseCase = Depends(
        get_update_document_member_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        DocumentMemberInput(
            document_id=document_id, user_id=user_id, capability=req.capability
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return DocumentMemberRes.from_entity(result.member)


@router.delete(
    "/{document_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT
)
def remove_document_member(
    document_id: UUID,
    user_id: UUID,
    use_case: RevokeDocumentMemberUseCase = Depends(
        get_revoke_document_member_use_case
    ),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(document_id, user_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)
    return None


# =============================================================================
# Share
# =============================================================================


@router.put("/{document_id}/share", response_model=ShareDocumentRes)
def share_document(
    document_id: UUID,
    req: ShareDocumentReq,
    use_case: ShareDocumentUseCase = Depends(get_share_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        document_id,
        ShareRequest(
            enable=req.enable,
            password=req.password,
            expires_at=req.expires_at,
            include_descendants=req.include_descendants,
            regenerate_token=req.regenerate_token,
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error, document_id=document_id)

    document = result.document
    config = document.share_config
    return ShareDocumentRes(
        document=DocumentRes.from_entity(document),
        token=config.token if config is not None else None,
        changed=result.changed,
    )
