"""Извлечение английских слов из текста с переводом на вьетнамский (dict.laban.vn).

    async with DictionaryClient() as client:
        result = await run_extraction("Cat cat, dog-house!", client)
"""

from lexical.client import DefinitionSource, DictionaryClient
from lexical.errors import BatchFailure, LexicalError, NetworkError
from lexical.extractor import WordExtractor, extract_and_translate, run_extraction
from lexical.tokenizer import tokenize
from lexical.types import ExtractionBatch, ExtractionResult, Meaning, Word

__all__ = [
    "DefinitionSource",
    "DictionaryClient",
    "BatchFailure",
    "LexicalError",
    "NetworkError",
    "WordExtractor",
    "extract_and_translate",
    "run_extraction",
    "tokenize",
    "ExtractionBatch",
    "ExtractionResult",
    "Meaning",
    "Word",
]
