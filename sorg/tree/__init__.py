"""Classify outline headings and assemble them into a page tree."""

from .builder import build_tree
from .classifier import Classification, Disposition, classify
from .models import ExternalFilePage, IndexPage, Page, PageInfo, PageVariant, PostPage
from .slugs import slugify

__all__ = [
    "Classification",
    "Disposition",
    "ExternalFilePage",
    "IndexPage",
    "Page",
    "PageInfo",
    "PageVariant",
    "PostPage",
    "build_tree",
    "classify",
    "slugify",
]
