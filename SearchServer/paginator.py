"""
Splits a result list into fixed-size pages for display.
"""
from typing import Iterable, Iterator, List, Sequence, TypeVar

T = TypeVar("T")


class Paginator:
    """Ordered pages of at most ``page_size`` items each."""

    def __init__(self, items: Iterable[T], page_size: int):
        if page_size <= 0:
            raise ValueError(f"Page size must be positive, got {page_size}")

        items = list(items)
        self.page_size = page_size
        self.pages: List[List[T]] = [
            items[start:start + page_size]
            for start in range(0, len(items), page_size)
        ]

    def __iter__(self) -> Iterator[List[T]]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, index: int) -> List[T]:
        return self.pages[index]


def paginate(container: Sequence[T], page_size: int) -> Paginator:
    return Paginator(container, page_size)
