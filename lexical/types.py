from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


class Meaning(BaseModel):
    part_of_speech: str
    definitions: List[str] = Field(default_factory=list)


class Word(BaseModel):
    word: str
    meanings: List[Meaning] = Field(default_factory=list)
    phonetic_uk: str = ""
    phonetic_us: str = ""
    uk_sound_url: Optional[str] = None
    us_sound_url: Optional[str] = None

    def sound_url(self, accent: str) -> Optional[str]:
        return self.uk_sound_url if accent == "uk" else self.us_sound_url


class ExtractionBatch(BaseModel):
    """Отправленный текст вместе с найденными для него словами"""

    input_text: str
    words: List[Word] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True


class ExtractionResult(BaseModel):
    words: Optional[List[Word]] = None
    error: Optional[str] = None
    input_text: str = ""

    @property
    def no_words_found(self) -> bool:
        return self.error is None and self.words is not None and not self.words
