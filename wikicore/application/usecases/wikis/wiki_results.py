"""
===============================================================================
WIKI USE CASE RESULTS
===============================================================================

Resultados tipados para casos de uso de wikis (alta, detalle, roster).
Reutilizan DocumentError/DocumentErrorCode para que el mapeo a HTTP sea único.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Wiki, WikiMember
from ..documents.document_results import DocumentError


@dataclass
class WikiResult:
    wiki: Wiki | None = None
    error: DocumentError | None = None


@dataclass
class WikiListResult:
    wikis: List[Wiki] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class WikiMemberResult:
    member: WikiMember | None = None
    error: DocumentError | None = None


@dataclass
class WikiMembersResult:
    members: List[WikiMember] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class RemoveWikiMemberResult:
    removed: bool = False
    error: DocumentError | None = None
