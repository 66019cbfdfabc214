"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/wikis.py
===============================================================================

Class/Module:
    Wiki Router

Responsibilities:
    - Crear wikis, leerlos y administrar su roster de miembros.
    - Listar documentos raíz y crear documentos (raíz o bajo un padre).

Collaborators:
    - wikicore.application.usecases (wikis + create/list documents)
    - wikicore.container (factories DI)
    - schemas.wikis / schemas.documents
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from wikicore.application.usecases import (
    AddWikiMemberUseCase,
    CreateDocumentInput,
    CreateDocumentUseCase,
    CreateWikiInput,
    CreateWikiUseCase,
    GetWikiUseCase,
    ListRootDocumentsUseCase,
    ListWikiMembersUseCase,
    RemoveWikiMemberUseCase,
)
from wikicore.container import (
    get_add_wiki_member_use_case,
    get_create_document_use_case,
    get_create_wiki_use_case,
    get_get_wiki_use_case,
    get_list_root_documents_use_case,
    get_list_wiki_members_use_case,
    get_remove_wiki_member_use_case,
)

from ..dependencies import current_actor
from ..error_mapping import raise_document_error
from ..schemas.documents import CreateDocumentReq, DocumentRes, DocumentsListRes
from ..schemas.wikis import (
    CreateWikiReq,
    WikiMemberReq,
    WikiMemberRes,
    WikiMembersRes,
    WikiRes,
)

router = APIRouter(prefix="/wikis", tags=["wikis"])


@router.post("", response_model=WikiRes, status_code=status.HTTP_201_CREATED)
def create_wiki(
    req: CreateWikiReq,
    use_case: CreateWikiUseCase = Depends(get_create_wiki_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        CreateWikiInput(
            name=req.name, visibility=req.visibility, description=req.description
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error)
    return WikiRes.from_entity(result.wiki)


@router.get("/{wiki_id}", response_model=WikiRes)
def get_wiki(
    wiki_id: UUID,
    use_case: GetWikiUseCase = Depends(get_get_wiki_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(wiki_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id)
    return WikiRes.from_entity(result.wiki)


# =============================================================================
# Roster
# =============================================================================


@router.get("/{wiki_id}/members", response_model=WikiMembersRes)
def list_wiki_members(
    wiki_id: UUID,
    use_case: ListWikiMembersUseCase = Depends(get_list_wiki_members_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(wiki_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id)
    return WikiMembersRes(
        members=[WikiMemberRes.from_entity(member) for member in result.members]
    )


@router.put("/{wiki_id}/members/{user_id}", response_model=WikiMemberRes)
def put_wiki_member(
    wiki_id: UUID,
    user_id: UUID,
    req: WikiMemberReq,
    use_case: AddWikiMemberUseCase = Depends(get_add_wiki_member_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(wiki_id, user_id, actor_id, role=req.role)
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id)
    return WikiMemberRes.from_entity(result.member)


@router.delete("/{wiki_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_wiki_member(
    wiki_id: UUID,
    user_id: UUID,
    use_case: RemoveWikiMemberUseCase = Depends(get_remove_wiki_member_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(wiki_id, user_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id)
    return None


# =============================================================================
# Documentos del wiki
# =============================================================================


@router.get("/{wiki_id}/documents", response_model=DocumentsListRes)
def list_root_documents(
    wiki_id: UUID,
    use_case: ListRootDocumentsUseCase = Depends(get_list_root_documents_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(wiki_id, actor_id)
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id)
    return DocumentsListRes(
        documents=[DocumentRes.from_entity(doc) for doc in result.documents]
    )


@router.post(
    "/{wiki_id}/documents",
    response_model=DocumentRes,
    status_code=status.HTTP_201_CREATED,
)
def create_document(
    wiki_id: UUID,
    req: CreateDocumentReq,
    use_case: CreateDocumentUseCase = Depends(get_create_document_use_case),
    actor_id: UUID | None = Depends(current_actor),
):
    result = use_case.execute(
        CreateDocumentInput(
            wiki_id=wiki_id,
            title=req.title,
            parent_id=req.parent_id,
            content=req.content,
        ),
        actor_id,
    )
    if result.error is not None:
        raise_document_error(result.error, wiki_id=wiki_id, document_id=req.parent_id)
    return DocumentRes.from_entity(result.document)
