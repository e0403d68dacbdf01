"""
Preprocessing module for text processing in the search server.
Includes tokenization, control character validation, minus word detection
and stop word filtering.
"""
from .tokenizer import (
    Token,
    tokenize,
    split_into_words,
    make_unique_non_empty_strings,
    has_special_characters,
    check_minus_usage,
)
from .preprocess import (
    PreprocessingPipeline,
    SpecialCharactersValidator,
    MinusWordPreprocessor,
    StopWordsPreprocessor,
)
from .document import Document, DocumentData, DocumentStatus, compute_average_rating
