"""Read-only projections over a row collection.

Nothing here mutates its input; the same rows and criteria always give the
same result, in the same order.
"""

from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from lumiscan.row import DataRow

ALL_SECTIONS = "All"


class FilterCriteria(BaseModel):
    """Section selector plus free-text search, combined with AND."""

    model_config = ConfigDict(frozen=True)

    section: str = Field(
        default=ALL_SECTIONS,
        description="'All' to match any section, otherwise one exact section name.",
    )
    search: str = Field(
        default="",
        description="Case-insensitive substring matched against key, value and source span.",
    )

    @property
    def query(self) -> str:
        return self.search.strip().lower()

    def matches(self, row: DataRow) -> bool:
        if self.section != ALL_SECTIONS and row.section != self.section:
            return False
        query = self.query
        return query == "" or query in row.search_text().lower()


def distinct_sections(rows: Iterable[DataRow]) -> list[str]:
    """Section labels in order of first appearance."""
    return list(dict.fromkeys(row.section for row in rows))


def filter_rows(rows: Sequence[DataRow], criteria: FilterCriteria | None = None) -> list[DataRow]:
    """Rows matching ``criteria``, in input order."""
    if criteria is None:
        criteria = FilterCriteria()
    return [row for row in rows if criteria.matches(row)]
