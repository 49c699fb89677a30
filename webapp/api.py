from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_async_session
from history import HistoryManager, HistoryPage, get_or_create_user, update_settings
from lexical.client import DefinitionSource
from lexical.extractor import run_extraction
from lexical.types import ExtractionBatch, Word
from models import User

router = APIRouter(prefix="/api")


# Pydantic модели
class ExtractRequest(BaseModel):
    text: str
    telegram_id: Optional[int] = None


class ExtractResponse(BaseModel):
    words: Optional[List[Word]]
    error: Optional[str]
    input_text: str
    record_id: Optional[int] = None


class HistoryItem(BaseModel):
    id: int
    created_at: Optional[datetime]
    input_text: str
    word_count: int

    class Config:
        from_attributes = True


class ExtractionResponse(BaseModel):
    id: int
    created_at: Optional[datetime]
    input_text: str
    words: List[Word]

    class Config:
        from_attributes = True


class HistoryPageResponse(BaseModel):
    record: ExtractionResponse
    has_next: bool
    has_previous: bool


class SettingsResponse(BaseModel):
    telegram_id: int
    show_word: bool
    show_vietnamese: bool

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    show_word: Optional[bool] = None
    show_vietnamese: Optional[bool] = None


# Dependency для получения асинхронной сессии БД
async def get_db(request: Request) -> AsyncSession:
    async with get_async_session(request.app.state.session_factory) as session:
        yield session


def get_dictionary(request: Request) -> DefinitionSource:
    return request.app.state.dictionary


def to_page_response(page: HistoryPage) -> HistoryPageResponse:
    return HistoryPageResponse(
        record=ExtractionResponse.model_validate(page.record),
        has_next=page.has_next,
        has_previous=page.has_previous,
    )


@router.post("/extract", response_model=ExtractResponse)
async def extract(
        data: ExtractRequest,
        db: AsyncSession = Depends(get_db),
        dictionary: DefinitionSource = Depends(get_dictionary),
):
    """Извлечение слов из текста и перевод; удачный результат попадает в историю"""
    result = await run_extraction(data.text, dictionary)

    record_id = None
    if result.error is None and result.words:
        if data.telegram_id is not None:
            await get_or_create_user(db, data.telegram_id)
        history = HistoryManager(db, data.telegram_id)
        record = await history.add(ExtractionBatch(input_text=result.input_text, words=result.words))
        record_id = record.id

    return ExtractResponse(
        words=result.words,
        error=result.error,
        input_text=result.input_text,
        record_id=record_id,
    )


# История
@router.get("/users/{telegram_id}/history", response_model=List[HistoryItem])
async def get_history(
        telegram_id: int,
        skip: int = 0,
        limit: int = config.HISTORY_PAGE_SIZE,
        db: AsyncSession = Depends(get_db),
):
    """Список прошлых извлечений, сначала новые"""
    if skip < 0 or limit <= 0:
        raise HTTPException(status_code=400, detail="Invalid pagination parameters")

    limit = min(limit, 100)
    return await HistoryManager(db, telegram_id).list(skip=skip, limit=limit)


@router.get("/users/{telegram_id}/history/page", response_model=HistoryPageResponse)
async def get_history_page(
        telegram_id: int,
        record_id: Optional[int] = None,
        db: AsyncSession = Depends(get_db),
):
    """Одна запись истории с признаками соседних записей"""
    page = await HistoryManager(db, telegram_id).page(record_id)
    if page is None:
        raise HTTPException(status_code=404, detail="History record not found")
    return to_page_response(page)


@router.get("/users/{telegram_id}/history/{record_id}", response_model=ExtractionResponse)
async def get_history_record(telegram_id: int, record_id: int, db: AsyncSession = Depends(get_db)):
    record = await HistoryManager(db, telegram_id).get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="History record not found")
    return record


@router.delete("/users/{telegram_id}/history")
async def clear_history(telegram_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await HistoryManager(db, telegram_id).clear()
    return {"deleted": deleted}


# Настройки отображения
@router.get("/users/{telegram_id}/settings", response_model=SettingsResponse)
async def get_settings(telegram_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_create_user(db, telegram_id)


@router.put("/users/{telegram_id}/settings", response_model=SettingsResponse)
async def put_settings(telegram_id: int, data: SettingsUpdate, db: AsyncSession = Depends(get_db)):
    user = await db.get(User, telegram_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    return await update_settings(db, user, **data.model_dump(exclude_unset=True))
