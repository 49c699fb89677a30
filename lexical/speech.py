import logging
from io import BytesIO
from typing import Optional

from gtts import gTTS

logger = logging.getLogger(__name__)

# Домен Google Translate определяет акцент озвучки
ACCENT_TLD = {
    "uk": "co.uk",
    "us": "com",
}


def synthesize(word: str, accent: str = "uk") -> Optional[bytes]:
    """Озвучка слова через gTTS, когда у словаря нет mp3"""
    try:
        tts = gTTS(word, lang="en", tld=ACCENT_TLD.get(accent, "com"))
        buffer = BytesIO()
        tts.write_to_fp(buffer)
        return buffer.getvalue()
    except Exception as e:
        logger.warning("⚠️ Ошибка при генерации аудио для %s: %s", word, e)
    return None
