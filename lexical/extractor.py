import asyncio
import logging
from typing import List, Optional

from lexical.client import DefinitionSource
from lexical.errors import BatchFailure, NetworkError
from lexical.parser import make_soup, parse_meanings, parse_transcription
from lexical.tokenizer import tokenize
from lexical.types import ExtractionResult, Word

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter text."
NO_WORDS_MESSAGE = "No distinct words could be extracted. Please try different text."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred while processing the text. Please try again later."


class WordExtractor:
    """Достаёт слова из текста и ищет каждое в словаре.

    Слова обрабатываются по очереди, чтобы не долбить сторонний сайт;
    внутри одного слова UK и US озвучка запрашиваются параллельно.
    """

    def __init__(self, source: DefinitionSource):
        self.source = source

    async def _sound_or_none(self, accent: str, word: str) -> Optional[str]:
        try:
            return await self.source.fetch_sound_url(accent, word)
        except NetworkError as e:
            logger.warning("⚠️ Не удалось получить озвучку (%s) для '%s': %s", accent, word, e)
            return None

    async def lookup(self, word: str) -> Word:
        """Полная карточка слова. NetworkError страницы словаря пробрасывается."""
        html = await self.source.fetch_definition_page(word)
        soup = make_soup(html)
        transcription = parse_transcription(soup)
        meanings = parse_meanings(soup)

        sounds = await asyncio.gather(
            self._sound_or_none("uk", word),
            self._sound_or_none("us", word),
            return_exceptions=True,
        )
        for sound in sounds:
            if isinstance(sound, BaseException):
                raise sound
        uk_sound_url, us_sound_url = sounds

        return Word(
            word=word,
            meanings=meanings,
            phonetic_uk=transcription,
            phonetic_us=transcription,
            uk_sound_url=uk_sound_url,
            us_sound_url=us_sound_url,
        )

    async def extract_and_translate(self, text: str) -> List[Word]:
        result: List[Word] = []
        try:
            for word in tokenize(text):
                try:
                    parsed = await self.lookup(word)
                except NetworkError as e:
                    logger.warning("❌ Пропускаем '%s': %s", word, e)
                    continue
                logger.debug("✅ %s: %d значений", word, len(parsed.meanings))
                result.append(parsed)
        except Exception as e:
            raise BatchFailure("Failed to extract and translate words") from e

        return result


async def extract_and_translate(text: str, source: DefinitionSource) -> List[Word]:
    return await WordExtractor(source).extract_and_translate(text)


async def run_extraction(text: Optional[str], source: DefinitionSource) -> ExtractionResult:
    """Обработка одной отправки текста: слова, либо сообщение об ошибке для пользователя"""
    text = text or ""
    if not text.strip():
        return ExtractionResult(words=None, error=EMPTY_INPUT_MESSAGE, input_text=text)

    try:
        words = await extract_and_translate(text, source)
    except BatchFailure:
        logger.exception("❌ Ошибка при обработке текста")
        return ExtractionResult(words=None, error=GENERIC_ERROR_MESSAGE, input_text=text)

    return ExtractionResult(words=words, error=None, input_text=text)
