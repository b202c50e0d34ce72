"""Error types raised while ingesting and analysing traces."""


class TraceError(Exception):
    """Base class for all trace ingestion failures."""


class MalformedInputError(TraceError, ValueError):
    """The trace document cannot be parsed or lacks required fields."""


class StructuralInconsistencyError(TraceError, RuntimeError):
    """The reconstructed tree or index violates a structural invariant.

    Raised when the tree has more than one root, when a stage is left open
    after all records were folded in, or when the index does not hold exactly
    one entry per repaired record.
    """
