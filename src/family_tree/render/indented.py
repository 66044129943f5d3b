"""Indented hierarchical rendering: one line per node, two spaces per level."""
from __future__ import annotations

from family_tree.graph.projection import TreeNode
from family_tree.render.base import life_span

INDENT = "  "


class IndentedTreeRenderer:
    """Renders ``- P001 Jane Doe (b.1950, d.2010)`` lines nested by depth."""

    name = "indented"

    def render(self, root: TreeNode) -> str:
        lines = [
            f"{INDENT * depth}- {node.person.person_id} {node.person.name} ({life_span(node.person)})"
            for node, depth in root.iter_with_depth()
        ]
        return "\n".join(lines)
