import logging

from aiogram import Router, F
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from handlers.common import format_batch, history_keyboard
from history import HistoryManager, get_or_create_user
from lexical.client import DefinitionSource
from lexical.extractor import NO_WORDS_MESSAGE, run_extraction
from lexical.types import ExtractionBatch

logger = logging.getLogger(__name__)

router = Router()


@router.message(F.text & ~F.text.startswith("/"))
async def extract_words(message: Message, session: AsyncSession, dictionary: DefinitionSource):
    user = await get_or_create_user(
        session,
        message.from_user.id,
        username=message.from_user.username,
        first_name=message.from_user.first_name,
        last_name=message.from_user.last_name,
    )

    progress = await message.answer("⏳ Extracting...")
    result = await run_extraction(message.text, dictionary)
    await progress.delete()

    if result.error:
        await message.answer(f"❌ {result.error}")
        return
    if result.no_words_found:
        await message.answer(f"🤷 {NO_WORDS_MESSAGE}")
        return

    history = HistoryManager(session, user.telegram_id)
    record = await history.add(ExtractionBatch(input_text=result.input_text, words=result.words))
    page = await history.page(record.id)
    logger.info("📝 %s: извлечено %d слов", user.telegram_id, len(result.words))

    chunks = format_batch(result.words, user.show_word, user.show_vietnamese)
    for chunk in chunks[:-1]:
        await message.answer(chunk, parse_mode="HTML")
    await message.answer(
        chunks[-1],
        parse_mode="HTML",
        reply_markup=history_keyboard(record.id, page.has_previous, page.has_next),
    )
