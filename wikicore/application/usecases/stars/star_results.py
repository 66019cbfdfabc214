"""
===============================================================================
STAR USE CASE RESULTS
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import Star
from ..documents.document_results import DocumentError


@dataclass
class ToggleStarResult:
    """
    starred=True: el star quedó creado (star != None).
    starred=False: el star existía y se eliminó.
    """

    starred: bool = False
    star: Star | None = None
    error: DocumentError | None = None


@dataclass
class StarStatusResult:
    starred: bool = False
    error: DocumentError | None = None
