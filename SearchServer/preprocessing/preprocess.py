from abc import ABC, abstractmethod
import logging
from typing import Iterable, List

from .tokenizer import Token, has_special_characters, make_unique_non_empty_strings
from ..errors import MalformedInputError

logger = logging.getLogger(__name__)


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, token: Token, document: str) -> Token:
        raise NotImplementedError()

    def preprocess_all(self, tokens: List[Token], document: str) -> List[Token]:
        return [self.preprocess(token, document) for token in tokens]


class SpecialCharactersValidator(TokenPreprocessor):
    """Rejects tokens that contain control characters."""

    def preprocess(self, token: Token, document: str) -> Token:
        if has_special_characters(token.processed_form):
            logger.warning("Rejected token with control character: %r", token.processed_form)
            raise MalformedInputError(token.processed_form)
        return token


class MinusWordPreprocessor(TokenPreprocessor):
    """Marks tokens starting with '-' as minus words and strips the sign."""

    def preprocess(self, token: Token, document: str) -> Token:
        if token.processed_form.startswith("-"):
            token.is_minus = True
            token.processed_form = token.processed_form[1:]
        return token


class StopWordsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing stop words."""

    def __init__(self, stop_words: Iterable[str] = ()):
        """
        Initialize preprocessor for removing stop words.

        Args:
            stop_words: Stop words; empty strings are ignored

        Raises:
            MalformedInputError: If a stop word contains a control character
        """
        self.stop_words = frozenset(make_unique_non_empty_strings(stop_words))
        for word in self.stop_words:
            if has_special_characters(word):
                raise MalformedInputError(word)

    def is_stop_word(self, word: str) -> bool:
        return word in self.stop_words

    def preprocess(self, token: Token, document: str) -> Token:
        """
        If token is a stop word, replace its processed_form with empty string.

        Args:
            token: Token to process
            document: Original document

        Returns:
            Processed token
        """
        if self.is_stop_word(token.processed_form):
            token.processed_form = ""
        return token


class PreprocessingPipeline:
    """Pipeline of token preprocessors."""

    def __init__(self, preprocessors, name="Default Pipeline"):
        """
        Initialize a preprocessing pipeline.

        Args:
            preprocessors: List of preprocessor objects
            name: Name of the pipeline
        """
        self.preprocessors = preprocessors
        self.name = name

    def preprocess(self, tokens: List[Token], document: str) -> List[Token]:
        """
        Apply all preprocessors to the tokens.

        Each preprocessor sees every token before the next one runs, so a
        validator placed first rejects the input before anything is dropped.

        Args:
            tokens: List of tokens to preprocess
            document: Original document text

        Returns:
            List of preprocessed tokens
        """
        for preprocessor in self.preprocessors:
            preprocessor.preprocess_all(tokens, document)

        return tokens

    def __repr__(self):
        steps = ", ".join(type(p).__name__ for p in self.preprocessors)
        return f"PreprocessingPipeline({self.name}: {steps})"
