"""
Parser for plus/minus keyword queries.

A query is a space separated list of words. A word prefixed with '-' is a
minus word: any document containing it is excluded from the results. All
other words are plus words and contribute to the relevance of a document.
Stop words are dropped from both groups.
"""
import logging
from typing import List, Set

from ..errors import MalformedQueryError
from ..preprocessing.preprocess import (
    PreprocessingPipeline,
    SpecialCharactersValidator,
    MinusWordPreprocessor,
    StopWordsPreprocessor,
)
from ..preprocessing.tokenizer import Token, tokenize, check_minus_usage

logger = logging.getLogger(__name__)


class Query:
    """Parsed query: two disjoint sets of words."""

    def __init__(self, plus_words: Set[str] = None, minus_words: Set[str] = None):
        self.plus_words = set(plus_words or ())
        self.minus_words = set(minus_words or ())

    def __repr__(self):
        return f"Query(plus={sorted(self.plus_words)}, minus={sorted(self.minus_words)})"

    def __eq__(self, other):
        if not isinstance(other, Query):
            return NotImplemented
        return self.plus_words == other.plus_words and self.minus_words == other.minus_words

    def is_empty(self) -> bool:
        return not self.plus_words and not self.minus_words


class QueryParser:
    """
    Turns raw query text into a ``Query``.

    The pipeline validates every token, detects the minus prefix, and only
    then checks the stripped word against the stop words.
    """

    def __init__(self, stop_words_preprocessor: StopWordsPreprocessor):
        self.stop_words_preprocessor = stop_words_preprocessor
        self.pipeline = PreprocessingPipeline(
            [
                SpecialCharactersValidator(),
                MinusWordPreprocessor(),
                stop_words_preprocessor,
            ],
            name="QueryPipeline",
        )

    def parse_tokens(self, text: str) -> List[Token]:
        """
        Validate the query text and run its tokens through the pipeline.

        Args:
            text: Raw query text

        Returns:
            Preprocessed tokens, dropped ones have an empty processed_form

        Raises:
            MalformedQueryError: If minus signs are misplaced
            MalformedInputError: If a word contains a control character
        """
        if not check_minus_usage(text):
            logger.warning("Rejected query with wrong minus usage: %r", text)
            raise MalformedQueryError(text)

        return self.pipeline.preprocess(tokenize(text), text)

    def parse(self, text: str) -> Query:
        query = Query()
        for token in self.parse_tokens(text):
            if not token.processed_form:
                continue
            if token.is_minus:
                query.minus_words.add(token.processed_form)
            else:
                query.plus_words.add(token.processed_form)

        # A word asked for both ways is an exclusion
        query.plus_words -= query.minus_words

        logger.debug("Parsed query %r into %r", text, query)
        return query


def parse_query(text: str, stop_words=()) -> Query:
    """
    Parse a query without building a search server.

    Args:
        text: Raw query text
        stop_words: Words to ignore

    Returns:
        Parsed query
    """
    return QueryParser(StopWordsPreprocessor(stop_words)).parse(text)
