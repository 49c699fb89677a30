from sqlalchemy import Column, Integer, BigInteger, Text, JSON, DateTime, ForeignKey, func

from lexical.types import ExtractionBatch, Word
from models import Base


class Extraction(Base):
    __tablename__ = "extractions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    telegram_id = Column(BigInteger, ForeignKey("users.telegram_id"), nullable=True, index=True)  # None для анонимных запросов
    input_text = Column(Text, nullable=False)
    words = Column(JSON, nullable=False, default=lambda: [])  # список Word.model_dump()
    created_at = Column(DateTime, server_default=func.now())

    @property
    def word_count(self) -> int:
        return len(self.words or [])

    def to_batch(self) -> ExtractionBatch:
        data = {
            "input_text": self.input_text,
            "words": [Word.model_validate(w) for w in self.words or []],
        }
        if self.created_at is not None:
            data["created_at"] = self.created_at
        return ExtractionBatch(**data)
