"""
@file: __init__.py
Query module public API.

This module exposes:
    - Search clauses: FetchAll, FetchById, NearText, Move, NearVector, NearObject, NearImage, NearMedia, Bm25, Hybrid
    - QueryDescriptor, SortSpec, GroupBySpec, get: the query descriptor and its builders
    - render_query: the query renderer
"""
from .search import (
    Bm25,
    FetchAll,
    FetchById,
    Hybrid,
    MEDIA_KINDS,
    Move,
    NearImage,
    NearMedia,
    NearObject,
    NearText,
    NearVector,
)
from .models import GroupBySpec, QueryDescriptor, SortDirection, SortSpec, get
from .renderer import render_query
