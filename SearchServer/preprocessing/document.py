"""
Document records used by the search server.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class DocumentStatus(Enum):
    ACTUAL = "ACTUAL"
    IRRELEVANT = "IRRELEVANT"
    BANNED = "BANNED"
    REMOVED = "REMOVED"

    @classmethod
    def parse(cls, value) -> "DocumentStatus":
        """Accept a status member or its name in any letter case."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown document status: {value!r}") from None


@dataclass(frozen=True)
class DocumentData:
    """Metadata stored for every indexed document."""

    rating: int
    status: DocumentStatus


@dataclass(frozen=True)
class Document:
    """
    A single search result.

    - id: caller-supplied document id
    - relevance: TF-IDF relevance of the document for the query
    - rating: averaged document rating
    """

    id: int = 0
    relevance: float = 0.0
    rating: int = 0

    def __str__(self) -> str:
        return (
            f"{{ document_id = {self.id}, relevance = {self.relevance:g}, "
            f"rating = {self.rating} }}"
        )


def compute_average_rating(ratings: Sequence[int]) -> int:
    """
    Average the ratings, truncating toward zero.

    Args:
        ratings: Integer ratings, possibly empty

    Returns:
        Integer mean of the ratings, 0 when there are none
    """
    if not ratings:
        return 0

    total = sum(ratings)
    # Floor division rounds toward negative infinity, so divide the magnitude
    average = abs(total) // len(ratings)
    return average if total >= 0 else -average
