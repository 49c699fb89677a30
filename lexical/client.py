import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp
from yarl import URL

import config
from lexical.errors import NetworkError

logger = logging.getLogger(__name__)

ACCENTS = ("uk", "us")


class DefinitionSource(ABC):
    """Источник страниц словаря и ссылок на озвучку.

    Подменяется в тестах фейковой реализацией, чтобы не ходить в сеть.
    """

    @abstractmethod
    async def fetch_definition_page(self, word: str) -> str:
        """Возвращает HTML страницы слова или бросает NetworkError"""

    @abstractmethod
    async def fetch_sound_url(self, accent: str, word: str) -> Optional[str]:
        """Возвращает абсолютную ссылку на mp3, None если её нет, или бросает NetworkError"""


class DictionaryClient(DefinitionSource):
    """Клиент dict.laban.vn поверх aiohttp.

    Можно передать готовую aiohttp-сессию (тогда клиент её не закрывает)
    или использовать как async context manager.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or config.DICTIONARY_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout or config.HTTP_TIMEOUT)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "DictionaryClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("DictionaryClient is not open, use 'async with DictionaryClient()'")
        return self._session

    def page_url(self, word: str) -> URL:
        return URL(f"{self.base_url}/find").with_query(type="1", query=word)

    def sound_url(self, accent: str, word: str) -> URL:
        return URL(f"{self.base_url}/ajax/getsound").with_query(accent=accent, word=word)

    async def fetch_definition_page(self, word: str) -> str:
        url = self.page_url(word)
        try:
            async with self.session.get(url, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(str(url), status=response.status)
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(str(url), reason=str(e) or type(e).__name__) from e

    async def fetch_sound_url(self, accent: str, word: str) -> Optional[str]:
        if accent not in ACCENTS:
            raise ValueError(f"Unknown accent: {accent!r}")

        url = self.sound_url(accent, word)
        try:
            async with self.session.get(url, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(str(url), status=response.status)
                # {"error":0, "data":"https://stream-dict-laban.zdn.vn/uk/.../feel.mp3", "id":34586}
                payload = await response.json(content_type=None)
        except ValueError as e:
            raise NetworkError(str(url), reason=f"malformed JSON: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(str(url), reason=str(e) or type(e).__name__) from e

        if not isinstance(payload, dict):
            raise NetworkError(str(url), reason="malformed JSON: expected an object")

        sound = payload.get("data")
        if not is_absolute_url(sound):
            logger.debug("🔇 Нет озвучки (%s) для '%s': %r", accent, word, sound)
            return None
        return sound.strip()


def is_absolute_url(value) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = URL(value.strip())
    except ValueError:
        return False
    return parsed.is_absolute() and parsed.scheme in ("http", "https") and bool(parsed.host)
