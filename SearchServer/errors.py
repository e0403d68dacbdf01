"""
Exceptions raised by the search server.

Every error aborts the operation that raised it; nothing is retried or
partially applied inside the index.
"""


class SearchServerError(Exception):
    """Base class for all search server errors."""


class MalformedInputError(SearchServerError, ValueError):
    """A token contains a control character (code point below 0x20)."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Token contains a control character: {token!r}")


class MalformedQueryError(SearchServerError, ValueError):
    """Minus words are used incorrectly in a query."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"Wrong usage of minus words in query: {query!r}")


class DuplicateOrInvalidIdError(SearchServerError, ValueError):
    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(
            f"Document {document_id} was not added: id is negative or already present"
        )


class UnknownDocumentIdError(SearchServerError, KeyError):
    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Unknown document id: {document_id}")

    def __str__(self):
        # KeyError quotes its argument by default
        return self.args[0]


class IndexOutOfRangeError(SearchServerError, IndexError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Document index out of range: {index}")
