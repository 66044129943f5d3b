"""Line-oriented command interpreter over a FamilyRegistry.

One command per line, whitespace-separated tokens, ``"double quotes"`` for
names containing spaces. Errors are reported as ``Error: <message>`` and
never end the session.
"""
from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass

from family_tree.exceptions import FamilyTreeError
from family_tree.graph.registry import FamilyRegistry
from family_tree.logging import get_logger
from family_tree.models.person import Person
from family_tree.render import get_renderer

logger = get_logger(__name__)

NONE_MARKER = "<none>"

HELP_TEXT = """Available commands:
  ADD_PERSON "<Full Name>" <Gender> <BirthYear> [DeathYear]
    Prints the new person's id (e.g. P001)
    Gender: MALE, FEMALE, OTHER
  ADD_PARENT_CHILD <parentId> <childId>
  MARRY <personAId> <personBId> <Year>
  DIVORCE <personAId> <personBId> <Year>
  ANCESTORS <personId> <generations> [indented|line|mermaid]
  DESCENDANTS <personId> <generations> [indented|line|mermaid]
  SIBLINGS <personId>
  CHILDREN <personId>
  SPOUSE <personId>
  SHOW <personId>
  HELP
  EXIT"""


class UsageError(ValueError):
    """Malformed command line (arity, integers, quoting, unknown command)."""


@dataclass
class CommandResult:
    """Text to print for one command, and whether the session should end."""
    output: str = ""
    ok: bool = True
    exit: bool = False


def split_command(line: str) -> list[str]:
    """Split on whitespace, keeping ``"quoted strings"`` together."""
    lexer = shlex.shlex(line, posix=True)
    lexer.quotes = '"'
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as exc:
        raise UsageError("Unterminated quoted string") from exc


def _int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise UsageError(f"{what} must be an integer, got '{token}'") from None


def _listing(people: list[Person]) -> str:
    if not people:
        return NONE_MARKER
    return "\n".join(f"{p.id} - {p.full_name}" for p in people)


class CommandInterpreter:
    """Dispatches command lines to registry operations.

    Example:
        >>> shell = CommandInterpreter(FamilyRegistry())
        >>> shell.execute('ADD_PERSON "Jane Doe" FEMALE 1950').output
        'P001'
    """

    def __init__(self, registry: FamilyRegistry | None = None) -> None:
        self.registry = registry or FamilyRegistry()
        self._handlers: dict[str, tuple[int, str, Callable[[list[str]], str]]] = {
            "ADD_PERSON": (4, 'ADD_PERSON "<Full Name>" <Gender> <BirthYear> [DeathYear]', self._add_person),
            "ADD_PARENT_CHILD": (3, "ADD_PARENT_CHILD <parentId> <childId>", self._add_parent_child),
            "MARRY": (4, "MARRY <personAId> <personBId> <Year>", self._marry),
            "DIVORCE": (4, "DIVORCE <personAId> <personBId> <Year>", self._divorce),
            "ANCESTORS": (3, "ANCESTORS <personId> <generations> [format]", self._ancestors),
            "DESCENDANTS": (3, "DESCENDANTS <personId> <generations> [format]", self._descendants),
            "SIBLINGS": (2, "SIBLINGS <personId>", self._siblings),
            "CHILDREN": (2, "CHILDREN <personId>", self._children),
            "SPOUSE": (2, "SPOUSE <personId>", self._spouse),
            "SHOW": (2, "SHOW <personId>", self._show),
        }

    def execute(self, line: str) -> CommandResult:
        """Run one command line. Never raises for bad input."""
        text = line.strip()
        if not text:
            return CommandResult()

        if text.upper() == "EXIT":
            return CommandResult(output="Goodbye!", exit=True)
        if text.upper() == "HELP":
            return CommandResult(output=HELP_TEXT)

        try:
            return CommandResult(output=self._dispatch(split_command(text)))
        except (FamilyTreeError, UsageError) as exc:
            logger.info("command_rejected", command=text, error=str(exc), error_type=type(exc).__name__)
            return CommandResult(output=f"Error: {exc}", ok=False)

    def _dispatch(self, parts: list[str]) -> str:
        command = parts[0].upper()
        if command not in self._handlers:
            raise UsageError(f"Unknown command: {command}. Type 'HELP' for available commands")

        min_args, usage, handler = self._handlers[command]
        if len(parts) < min_args:
            raise UsageError(f"Usage: {usage}")
        return handler(parts)

    def _add_person(self, parts: list[str]) -> str:
        birth_year = _int(parts[3], "BirthYear")
        death_year = _int(parts[4], "DeathYear") if len(parts) > 4 else None
        person = self.registry.create_person(parts[1], parts[2], birth_year, death_year)
        return person.id

    def _add_parent_child(self, parts: list[str]) -> str:
        self.registry.add_parent_child(parts[1], parts[2])
        return "OK"

    def _marry(self, parts: list[str]) -> str:
        self.registry.marry(parts[1], parts[2], _int(parts[3], "Year"))
        return "OK"

    def _divorce(self, parts: list[str]) -> str:
        self.registry.divorce(parts[1], parts[2], _int(parts[3], "Year"))
        return "OK"

    def _ancestors(self, parts: list[str]) -> str:
        generations = _int(parts[2], "generations")
        return self.registry.render_ancestors(parts[1], generations, self._renderer(parts))

    def _descendants(self, parts: list[str]) -> str:
        generations = _int(parts[2], "generations")
        return self.registry.render_descendants(parts[1], generations, self._renderer(parts))

    def _renderer(self, parts: list[str]):
        if len(parts) < 4:
            return None
        try:
            return get_renderer(parts[3])
        except ValueError as exc:
            raise UsageError(str(exc)) from exc

    def _siblings(self, parts: list[str]) -> str:
        return _listing(sorted(self.registry.siblings_of(parts[1]), key=lambda p: (len(p.id), p.id)))

    def _children(self, parts: list[str]) -> str:
        return _listing(self.registry.children_of(parts[1]))

    def _spouse(self, parts: list[str]) -> str:
        spouse = self.registry.spouse_of(parts[1])
        return _listing([spouse] if spouse is not None else [])

    def _show(self, parts: list[str]) -> str:
        return self.registry.get_person(parts[1]).describe()
