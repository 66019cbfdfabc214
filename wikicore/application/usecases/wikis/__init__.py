"""Wiki namespace and roster use cases."""

from .create_wiki import CreateWikiInput, CreateWikiUseCase
from .get_wiki import GetWikiUseCase
from .manage_wiki_members import (
    AddWikiMemberUseCase,
    ListWikiMembersUseCase,
    RemoveWikiMemberUseCase,
)
from .wiki_results import (
    RemoveWikiMemberResult,
    WikiListResult,
    WikiMemberResult,
    WikiMembersResult,
    WikiResult,
)

__all__ = [
    "AddWikiMemberUseCase",
    "CreateWikiInput",
    "CreateWikiUseCase",
    "GetWikiUseCase",
    "ListWikiMembersUseCase",
    "RemoveWikiMemberResult",
    "RemoveWikiMemberUseCase",
    "WikiListResult",
    "WikiMemberResult",
    "WikiMembersResult",
    "WikiResult",
]
