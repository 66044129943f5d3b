"""Error taxonomy for family tree operations.

Every error is a caller-input or state error. Operations raising them leave
the registry exactly as it was before the call.
"""
from __future__ import annotations


class FamilyTreeError(Exception):
    """Base class for all family tree errors."""


class ValidationError(FamilyTreeError):
    """Bad name, year or argument at construction or mutation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DuplicateIdError(FamilyTreeError):
    def __init__(self, person_id: str):
        super().__init__(f"Person with ID {person_id} already exists")
        self.person_id = person_id


class NotFoundError(FamilyTreeError):
    def __init__(self, person_id: str):
        super().__init__(f"Person with ID {person_id} not found")
        self.person_id = person_id


class TooManyParentsError(FamilyTreeError):
    def __init__(self, person_id: str):
        super().__init__(f"Person {person_id} already has two parents")
        self.person_id = person_id


class CycleDetectedError(FamilyTreeError):
    """Linking would make a person their own ancestor."""

    def __init__(self, parent_id: str, child_id: str):
        super().__init__(f"Cannot create cycle: {child_id} is ancestor of {parent_id}")
        self.parent_id = parent_id
        self.child_id = child_id


class AlreadyMarriedError(FamilyTreeError):
    def __init__(self, person_id: str, spouse_id: str | None = None):
        message = f"Person {person_id} is already married"
        if spouse_id is not None:
            message += f" (spouse={spouse_id})"
        super().__init__(message)
        self.person_id = person_id
        self.spouse_id = spouse_id


class InvalidYearError(FamilyTreeError):
    def __init__(self, year: int, birth_year: int):
        super().__init__(f"Year {year} cannot be before birth year {birth_year}")
        self.year = year
        self.birth_year = birth_year
