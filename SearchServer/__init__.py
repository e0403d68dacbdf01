"""
SearchServer: in-memory keyword search with TF-IDF ranking, stop words and
minus words.
"""
from .errors import (
    SearchServerError,
    MalformedInputError,
    MalformedQueryError,
    DuplicateOrInvalidIdError,
    UnknownDocumentIdError,
    IndexOutOfRangeError,
)
from .preprocessing.document import Document, DocumentData, DocumentStatus
from .query.parser import Query, parse_query
from .tfidf_search.tfidf_search import SearchServer, status_predicate
from .paginator import Paginator, paginate
from .request_queue import RequestQueue
