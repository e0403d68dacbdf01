"""
TF-IDF search module.

Documents are indexed word by word into an inverted index that stores the
term frequency of every word in every document. Queries are ranked by the sum
of TF * IDF over their plus words; any minus word excludes a document
entirely.
"""
import functools
import logging
import math
from typing import Callable, Dict, Iterable, Iterator, List, Tuple, Union

from ..config import load_config, get_setting
from ..errors import (
    DuplicateOrInvalidIdError,
    IndexOutOfRangeError,
    UnknownDocumentIdError,
)
from ..preprocessing.document import (
    Document,
    DocumentData,
    DocumentStatus,
    compute_average_rating,
)
from ..preprocessing.preprocess import (
    PreprocessingPipeline,
    SpecialCharactersValidator,
    StopWordsPreprocessor,
)
from ..preprocessing.tokenizer import tokenize, split_into_words
from ..query.parser import Query, QueryParser

logger = logging.getLogger(__name__)

DocumentPredicate = Callable[[int, DocumentStatus, int], bool]


class InvertedIndex:
    """Inverted index mapping words to the term frequency in each document."""

    def __init__(self):
        self.index: Dict[str, Dict[int, float]] = {}  # {word: {doc_id: tf}}
        self.documents: Dict[int, DocumentData] = {}
        self.document_ids: List[int] = []  # in insertion order

    @property
    def document_count(self) -> int:
        return len(self.documents)

    def add_document(self, document_id: int, words: List[str], data: DocumentData):
        """
        Add a document to the inverted index.

        Args:
            document_id: Id of the document, must not be present yet
            words: Retained words of the document, repeats included
            data: Rating and status of the document
        """
        if words:
            inv_word_count = 1.0 / len(words)
            for word in words:
                postings = self.index.setdefault(word, {})
                postings[document_id] = postings.get(document_id, 0.0) + inv_word_count

        self.documents[document_id] = data
        self.document_ids.append(document_id)

    def get_postings(self, word: str) -> Dict[int, float]:
        return self.index.get(word, {})

    def get_document_frequency(self, word: str) -> int:
        """
        Get the number of documents containing the given word.

        Args:
            word: The word to check

        Returns:
            Number of documents containing the word
        """
        return len(self.index.get(word, {}))

    def get_inverse_document_frequency(self, word: str) -> float:
        """
        Calculate the inverse document frequency for a word.
        IDF(t) = ln(N/DF(t))

        Args:
            word: The word to calculate IDF for

        Returns:
            IDF value for the word, 0 for unknown words
        """
        df = self.get_document_frequency(word)
        if df == 0:
            return 0.0
        return math.log(self.document_count / df)

    def get_word_frequencies(self, document_id: int) -> Dict[str, float]:
        """Collect the term frequencies of one document from the postings."""
        return {
            word: postings[document_id]
            for word, postings in self.index.items()
            if document_id in postings
        }

    def __contains__(self, word: str) -> bool:
        return word in self.index

    def __len__(self) -> int:
        return len(self.index)


def status_predicate(status: DocumentStatus) -> DocumentPredicate:
    """Build a predicate accepting only documents with the given status."""
    def predicate(document_id: int, document_status: DocumentStatus, rating: int) -> bool:
        return document_status == status
    return predicate


def _make_predicate(predicate) -> DocumentPredicate:
    if predicate is None:
        return status_predicate(DocumentStatus.ACTUAL)
    if isinstance(predicate, DocumentStatus):
        return status_predicate(predicate)
    if callable(predicate):
        return predicate
    raise TypeError(f"Expected a DocumentStatus or a callable, got {type(predicate).__name__}")


class SearchServer:
    """In-memory TF-IDF search server with stop words and minus words."""

    def __init__(
        self,
        stop_words: Union[str, Iterable[str]] = (),
        config=None,
        max_result_document_count: int = None,
        relevance_epsilon: float = None,
    ):
        """
        Initialize the search server.

        Args:
            stop_words: Stop words as an iterable or a space separated string
            config: Configuration dictionary (loaded from config.json if not provided)
            max_result_document_count: Overrides the configured top-K size
            relevance_epsilon: Overrides the configured relevance tolerance

        Raises:
            MalformedInputError: If a stop word contains a control character
        """
        self.config = config if config is not None else load_config()

        if max_result_document_count is None:
            max_result_document_count = get_setting(self.config, "search", "max_result_document_count")
        if relevance_epsilon is None:
            relevance_epsilon = get_setting(self.config, "search", "relevance_epsilon")
        self.max_result_document_count = int(max_result_document_count)
        if self.max_result_document_count <= 0:
            raise ValueError(
                f"Result document count must be positive, got {self.max_result_document_count}"
            )
        self.relevance_epsilon = float(relevance_epsilon)

        if isinstance(stop_words, str):
            stop_words = split_into_words(stop_words)
        self.stop_words_preprocessor = StopWordsPreprocessor(stop_words)

        self.inverted_index = InvertedIndex()
        self.document_pipeline = PreprocessingPipeline(
            [SpecialCharactersValidator(), self.stop_words_preprocessor],
            name="DocumentPipeline",
        )
        self.query_parser = QueryParser(self.stop_words_preprocessor)

    @property
    def stop_words(self):
        return self.stop_words_preprocessor.stop_words

    def add_document(
        self,
        document_id: int,
        document: str,
        status: DocumentStatus = DocumentStatus.ACTUAL,
        ratings: Iterable[int] = (),
    ):
        """
        Add a document to the search server.

        The document is fully validated before the index is touched, so a
        rejected document leaves the server unchanged.

        Args:
            document_id: Unique non-negative id
            document: Document text
            status: Document status
            ratings: Ratings given to the document

        Raises:
            DuplicateOrInvalidIdError: If the id is negative or already present
            MalformedInputError: If a word contains a control character
        """
        if document_id < 0 or document_id in self.inverted_index.documents:
            logger.warning("Rejected document with id %s", document_id)
            raise DuplicateOrInvalidIdError(document_id)

        tokens = self.document_pipeline.preprocess(tokenize(document), document)
        words = [token.processed_form for token in tokens if token.processed_form]

        data = DocumentData(
            rating=compute_average_rating(list(ratings)),
            status=DocumentStatus.parse(status),
        )
        self.inverted_index.add_document(document_id, words, data)

        logger.debug("Added document %s with %d words", document_id, len(words))

    def add_documents(self, documents_list: Iterable[dict]):
        """
        Add several documents given as dictionaries.

        Args:
            documents_list: Dictionaries with id, text, status and ratings fields
        """
        for doc_data in documents_list:
            self.add_document(
                int(doc_data["id"]),
                doc_data.get("text", ""),
                DocumentStatus.parse(doc_data.get("status", DocumentStatus.ACTUAL)),
                doc_data.get("ratings", []),
            )

    def get_document_count(self) -> int:
        return self.inverted_index.document_count

    def get_document_id(self, index: int) -> int:
        """
        Get the id of the document added at the given position.

        Raises:
            IndexOutOfRangeError: If index is outside [0, document count)
        """
        if index < 0 or index >= self.get_document_count():
            raise IndexOutOfRangeError(index)
        return self.inverted_index.document_ids[index]

    def parse_query(self, raw_query: str) -> Query:
        return self.query_parser.parse(raw_query)

    def find_top_documents(self, raw_query: str, predicate=None) -> List[Document]:
        """
        Search for the most relevant documents.

        Args:
            raw_query: Query text
            predicate: Callable (document_id, status, rating) -> bool, a
                DocumentStatus to match exactly, or None for ACTUAL documents

        Returns:
            At most max_result_document_count documents, most relevant first

        Raises:
            MalformedQueryError: If minus signs are misplaced
            MalformedInputError: If a word contains a control character
        """
        query = self.parse_query(raw_query)
        matched_documents = self.find_all_documents(query, _make_predicate(predicate))

        matched_documents.sort(key=functools.cmp_to_key(self._compare_documents))

        return matched_documents[:self.max_result_document_count]

    def find_all_documents(self, query: Query, predicate: DocumentPredicate) -> List[Document]:
        """
        Score every document matching the query.

        Args:
            query: Parsed query
            predicate: Filter applied to each candidate document

        Returns:
            Unsorted list of matching documents
        """
        documents = self.inverted_index.documents
        document_to_relevance: Dict[int, float] = {}

        for word in query.plus_words:
            if word not in self.inverted_index:
                continue
            inverse_document_freq = self.inverted_index.get_inverse_document_frequency(word)
            for document_id, term_freq in self.inverted_index.get_postings(word).items():
                data = documents[document_id]
                if predicate(document_id, data.status, data.rating):
                    document_to_relevance[document_id] = (
                        document_to_relevance.get(document_id, 0.0)
                        + term_freq * inverse_document_freq
                    )

        for word in query.minus_words:
            for document_id in self.inverted_index.get_postings(word):
                document_to_relevance.pop(document_id, None)

        return [
            Document(document_id, relevance, documents[document_id].rating)
            for document_id, relevance in document_to_relevance.items()
        ]

    def match_document(self, raw_query: str, document_id: int) -> Tuple[List[str], DocumentStatus]:
        """
        Explain which plus words of a query match a document.

        An empty list is returned both when nothing matches and when the
        document contains a minus word.

        Args:
            raw_query: Query text
            document_id: Id of an indexed document

        Returns:
            Tuple of (sorted matched plus words, document status)

        Raises:
            UnknownDocumentIdError: If the document was never added
        """
        query = self.parse_query(raw_query)

        if document_id not in self.inverted_index.documents:
            raise UnknownDocumentIdError(document_id)
        status = self.inverted_index.documents[document_id].status

        for word in query.minus_words:
            if document_id in self.inverted_index.get_postings(word):
                return [], status

        matched_words = sorted(
            word for word in query.plus_words
            if document_id in self.inverted_index.get_postings(word)
        )
        return matched_words, status

    def _compare_documents(self, lhs: Document, rhs: Document) -> int:
        if abs(lhs.relevance - rhs.relevance) < self.relevance_epsilon:
            if lhs.rating != rhs.rating:
                return -1 if lhs.rating > rhs.rating else 1
            # Stable order for documents that are equal in every ranked field
            return lhs.id - rhs.id
        return -1 if lhs.relevance > rhs.relevance else 1

    def __iter__(self) -> Iterator[int]:
        return iter(self.inverted_index.document_ids)

    def __len__(self) -> int:
        return self.get_document_count()

    def __contains__(self, document_id: int) -> bool:
        return document_id in self.inverted_index.documents
