"""Mermaid flowchart rendering of a tree snapshot."""
from __future__ import annotations

from family_tree.graph.projection import TreeNode
from family_tree.render.base import life_span


class MermaidRenderer:
    """Renders a ``flowchart TD`` diagram for GitHub/GitLab markdown.

    Nodes are keyed by person id, so a person reached through two paths is
    drawn once with two incoming edges.
    """

    name = "mermaid"

    def render(self, root: TreeNode) -> str:
        lines = ["flowchart TD"]
        declared: set[str] = set()
        edges: list[str] = []

        for node in root.iter_nodes():
            person = node.person
            nid = _node_id(person.person_id)
            if nid not in declared:
                declared.add(nid)
                label = f"{person.person_id} {person.name} ({life_span(person)})"
                lines.append(f"  {nid}[\"{_escape(label)}\"]")
            for child in node.children:
                edge = f"  {nid} --> {_node_id(child.person.person_id)}"
                if edge not in edges:
                    edges.append(edge)

        lines.extend(edges)
        return "\n".join(lines)


def _node_id(person_id: str) -> str:
    # Generate a mermaid-safe identifier
    return "N_" + "".join(ch if ch.isalnum() else "_" for ch in person_id)[:60]


def _escape(label: str) -> str:
    return label.replace('"', "#quot;")
