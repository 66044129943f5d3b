"""Family Tree - in-memory genealogy graph.

People linked by parent/child and spousal relationships, with pedigree
queries (ancestors, descendants, siblings) and pluggable text renderings.
"""

__version__ = "0.1.0"


# Lazy imports keep `import family_tree` cheap for the CLI
def __getattr__(name: str):
    if name == "FamilyRegistry":
        from family_tree.graph.registry import FamilyRegistry
        return FamilyRegistry
    if name == "Person":
        from family_tree.models.person import Person
        return Person
    if name == "Gender":
        from family_tree.models.person import Gender
        return Gender
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
