"""
===============================================================================
TARJETA CRC — domain/document_tree.py
===============================================================================

Módulo:
    Navegación acotada del árbol de documentos

Responsabilidades:
    - Recorrer la cadena de ancestros de un documento (padre, abuelo, ...)
      con profundidad máxima y detección de ciclos.
    - Recolectar el subárbol de un documento (para borrado en cascada).
    - Detectar si un documento está dentro del subárbol de otro (move).
    - Convertir corrupción del árbol en DocumentTreeIntegrityError
      (nunca en "acceso denegado" silencioso).

Colaboradores:
    - domain.repositories.DocumentRepository: get_document / list_children.
    - application.authority.AuthorityResolver: herencia por ancestro.
    - application.sharing.ShareStateMachine: share con descendientes.

Invariantes:
    - Todo ancestro pertenece al mismo wiki que el documento de partida.
    - El recorrido termina en una raíz en <= max_depth pasos.
    - Las lecturas NO son transaccionales entre sí: un padre que desaparece
      a mitad del recorrido es DANGLING_PARENT.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List
from uuid import UUID

from .entities import Document
from .repositories import DocumentRepository


class IntegrityFault(str, Enum):
    """Tipo de corrupción detectada en el árbol."""

    CYCLE = "cycle"
    DANGLING_PARENT = "dangling_parent"
    CROSS_WIKI = "cross_wiki"
    DEPTH_EXCEEDED = "depth_exceeded"
    MISSING_WIKI = "missing_wiki"


class DocumentTreeIntegrityError(Exception):
    """
    Corrupción de datos en el árbol de documentos.

    Es una falla de consistencia, no una decisión de seguridad: quien la
    captura debe denegar (fail closed) y reportarla a operadores.
    """

    def __init__(self, kind: IntegrityFault, document_id: UUID, message: str):
        super().__init__(message)
        self.kind = kind
        self.document_id = document_id
        self.message = message


def iter_ancestors(
    documents: DocumentRepository,
    document: Document,
    *,
    max_depth: int,
) -> Iterator[Document]:
    """
    Itera ancestros desde el padre hacia la raíz (el más cercano primero).

    Es lazy: quien corta la iteración temprano (ej. encontró un grant) no
    paga las lecturas restantes.

    Raises:
        DocumentTreeIntegrityError: ciclo, padre inexistente, padre de otro
        wiki o cadena más larga que max_depth.
    """
    seen = {document.id}
    current = document
    depth = 0

    while current.parent_id is not None:
        depth += 1
        if depth > max_depth:
            raise DocumentTreeIntegrityError(
                IntegrityFault.DEPTH_EXCEEDED,
                document.id,
                f"Ancestor chain longer than {max_depth}",
            )

        parent_id = current.parent_id
        if parent_id in seen:
            raise DocumentTreeIntegrityError(
                IntegrityFault.CYCLE,
                document.id,
                f"Cycle detected at document {parent_id}",
            )

        parent = documents.get_document(parent_id)
        if parent is None:
            raise DocumentTreeIntegrityError(
                IntegrityFault.DANGLING_PARENT,
                document.id,
                f"Document {current.id} references missing parent {parent_id}",
            )
        if parent.wiki_id != document.wiki_id:
            raise DocumentTreeIntegrityError(
                IntegrityFault.CROSS_WIKI,
                document.id,
                f"Parent {parent_id} belongs to another wiki",
            )

        seen.add(parent_id)
        yield parent
        current = parent


def collect_subtree(
    documents: DocumentRepository,
    root: Document,
    *,
    max_nodes: int,
) -> List[Document]:
    """
    Devuelve root + todos sus descendientes (BFS, root primero).

    Un nodo visto dos veces es un ciclo; un subárbol con más de max_nodes
    nodos se trata como corrupción para no recorrer sin límite.
    """
    collected: List[Document] = [root]
    seen = {root.id}
    frontier = [root]

    while frontier:
        next_frontier: List[Document] = []
        for node in frontier:
            for child in documents.list_children(node.id):
                if child.id in seen:
                    raise DocumentTreeIntegrityError(
                        IntegrityFault.CYCLE,
                        root.id,
                        f"Cycle detected at document {child.id}",
                    )
                if child.wiki_id != root.wiki_id:
                    raise DocumentTreeIntegrityError(
                        IntegrityFault.CROSS_WIKI,
                        root.id,
                        f"Child {child.id} belongs to another wiki",
                    )
                seen.add(child.id)
                collected.append(child)
                next_frontier.append(child)
                if len(collected) > max_nodes:
                    raise DocumentTreeIntegrityError(
                        IntegrityFault.DEPTH_EXCEEDED,
                        root.id,
                        f"Subtree larger than {max_nodes} documents",
                    )
        frontier = next_frontier

    return collected


def is_within_subtree(
    documents: DocumentRepository,
    candidate: Document,
    subtree_root_id: UUID,
    *,
    max_depth: int,
) -> bool:
    """True si candidate es subtree_root_id o uno de sus descendientes."""
    if candidate.id == subtree_root_id:
        return True
    for ancestor in iter_ancestors(documents, candidate, max_depth=max_depth):
        if ancestor.id == subtree_root_id:
            return True
    return False
