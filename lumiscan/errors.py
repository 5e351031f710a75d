"""Exceptions raised by the review core.

None of these are fatal to a review session: the session turns each of them
into a user-visible notice and leaves the store as it was.
"""


class LumiscanError(Exception):
    """Base class for all review-core errors."""


class RowNotFoundError(LumiscanError, LookupError):
    """An update or delete referenced an identity the store does not hold."""

    def __init__(self, row_id: str):
        super().__init__(f"No row with id {row_id!r}")
        self.row_id = row_id


class MalformedInputError(LumiscanError, ValueError):
    """A snapshot or import did not decode to a list of rows."""


class ExtractionFailedError(LumiscanError):
    """The extraction collaborator could not produce a batch."""


class EmptyExportRequestError(LumiscanError):
    """An export was requested while the store holds no rows."""


class PersistenceError(LumiscanError):
    """Saving the snapshot failed; the mutation that triggered it was undone."""
