"""Text renderers for tree snapshots.

Supported formats:
- indented: Hierarchical, two-space indent per generation
- line: Flat, one line per node with gender
- mermaid: Diagram markup for GitHub/GitLab
"""
from __future__ import annotations

from family_tree.render.base import Renderer, life_span
from family_tree.render.indented import IndentedTreeRenderer
from family_tree.render.line import LineRenderer
from family_tree.render.mermaid import MermaidRenderer

__all__ = [
    "Renderer",
    "IndentedTreeRenderer",
    "LineRenderer",
    "MermaidRenderer",
    "RENDERERS",
    "get_renderer",
    "life_span",
]


RENDERERS: dict[str, type[Renderer]] = {
    "indented": IndentedTreeRenderer,
    "line": LineRenderer,
    "mermaid": MermaidRenderer,
}


def get_renderer(name: str) -> Renderer:
    """Instantiate a renderer by name.

    Raises:
        ValueError: If the name is not registered
    """
    key = name.strip().lower()
    if key not in RENDERERS:
        supported = ", ".join(RENDERERS)
        raise ValueError(f"Unsupported renderer '{name}'. Supported: {supported}")
    return RENDERERS[key]()
