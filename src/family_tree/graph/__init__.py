"""Relationship graph for the family tree.

Provides:
- FamilyRegistry: owner of all people and relationship mutations
- PedigreeTraversal: ancestor/descendant walks, siblings, ancestry test
- TreeProjection: renderable snapshots rooted at one person
"""
from .projection import (
    TreeNode,
    TreeProjection,
    build_ancestor_tree,
    build_descendant_tree,
)
from .registry import FamilyRegistry
from .traversal import PedigreeTraversal

__all__ = [
    "FamilyRegistry",
    "PedigreeTraversal",
    "TreeNode",
    "TreeProjection",
    "build_ancestor_tree",
    "build_descendant_tree",
]
