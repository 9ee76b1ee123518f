"""
Engine error hierarchy.

Evaluators never raise for missing household data; these exceptions cover
lookups that demand a reference row, unknown programme ids and allocation
defects.
"""


class EngineError(Exception):
    """Base class for subsidy engine errors."""


class NoReferenceDataError(EngineError, LookupError):
    """A reference table has no row for the requested key."""

    def __init__(self, table: str, key):
        self.table = table
        self.key = key
        super().__init__(f"No {table} reference data for {key!r}")


class UnknownProgramError(EngineError, KeyError):
    """A subsidy programme id is not registered."""

    def __init__(self, program_id: str):
        self.program_id = program_id
        super().__init__(program_id)

    def __str__(self) -> str:
        return f"Unknown subsidy programme: {self.program_id}"


class InvariantViolation(EngineError, AssertionError):
    """Allocation arithmetic broke an invariant (implementation defect)."""
