import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from lexical.types import ExtractionBatch
from models import Extraction, User

logger = logging.getLogger(__name__)


@dataclass
class HistoryPage:
    record: Extraction
    has_next: bool  # есть более новая запись
    has_previous: bool  # есть более старая запись


class HistoryManager:
    """История извлечений одного пользователя в рамках одной сессии БД.

    telegram_id=None - общая история анонимных запросов.
    """

    def __init__(self, session: AsyncSession, telegram_id: Optional[int] = None):
        self.session = session
        self.telegram_id = telegram_id

    def _owner(self):
        if self.telegram_id is None:
            return Extraction.telegram_id.is_(None)
        return Extraction.telegram_id == self.telegram_id

    async def add(self, batch: ExtractionBatch) -> Extraction:
        record = Extraction(
            telegram_id=self.telegram_id,
            input_text=batch.input_text,
            words=[word.model_dump() for word in batch.words],
            created_at=batch.created_at.replace(tzinfo=None),
        )
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        logger.info("💾 Сохранено извлечение #%s: %d слов", record.id, record.word_count)
        return record

    async def list(self, skip: int = 0, limit: int = 20) -> List[Extraction]:
        result = await self.session.execute(
            select(Extraction)
            .where(self._owner())
            .order_by(Extraction.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Extraction).where(self._owner())
        )
        return result.scalar_one()

    async def get(self, record_id: int) -> Optional[Extraction]:
        result = await self.session.execute(
            select(Extraction).where(Extraction.id == record_id, self._owner())
        )
        return result.scalar_one_or_none()

    async def latest(self) -> Optional[Extraction]:
        records = await self.list(limit=1)
        return records[0] if records else None

    async def _exists(self, condition) -> bool:
        result = await self.session.execute(
            select(Extraction.id).where(self._owner(), condition).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def page(self, record_id: Optional[int] = None) -> Optional[HistoryPage]:
        """Запись истории с признаками соседей; без record_id - самая новая"""
        record = await self.latest() if record_id is None else await self.get(record_id)
        if record is None:
            return None

        return HistoryPage(
            record=record,
            has_next=await self._exists(Extraction.id > record.id),
            has_previous=await self._exists(Extraction.id < record.id),
        )

    async def neighbour(self, record_id: int, newer: bool) -> Optional[HistoryPage]:
        if newer:
            query = select(Extraction).where(self._owner(), Extraction.id > record_id).order_by(Extraction.id.asc())
        else:
            query = select(Extraction).where(self._owner(), Extraction.id < record_id).order_by(Extraction.id.desc())

        result = await self.session.execute(query.limit(1))
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return await self.page(record.id)

    async def clear(self) -> int:
        result = await self.session.execute(delete(Extraction).where(self._owner()))
        await self.session.commit()
        logger.info("🗑 История очищена: %s записей", result.rowcount)
        return result.rowcount or 0


async def get_or_create_user(
    session: AsyncSession,
    telegram_id: int,
    username: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    user = await session.get(User, telegram_id)
    if user is not None:
        return user

    user = User(
        telegram_id=telegram_id,
        username=username,
        first_name=first_name or "User",
        last_name=last_name,
        show_word=True,
        show_vietnamese=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def update_settings(
    session: AsyncSession,
    user: User,
    show_word: Optional[bool] = None,
    show_vietnamese: Optional[bool] = None,
) -> User:
    if show_word is not None:
        user.show_word = show_word
    if show_vietnamese is not None:
        user.show_vietnamese = show_vietnamese
    await session.commit()
    await session.refresh(user)
    return user
