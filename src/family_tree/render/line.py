"""Flat rendering: one line per node, no indentation, gender included."""
from __future__ import annotations

from family_tree.graph.projection import TreeNode
from family_tree.render.base import life_span


class LineRenderer:
    name = "line"

    def render(self, root: TreeNode) -> str:
        lines: list[str] = []
        root.traverse(
            lambda node: lines.append(
                f"{node.person.person_id} - {node.person.name} "
                f"({node.person.gender.name}, {life_span(node.person)})"
            )
        )
        return "\n".join(lines)
