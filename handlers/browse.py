from typing import List

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from handlers.common import HistoryCallback, format_word, history_keyboard, split_messages
from history import HistoryManager, HistoryPage, get_or_create_user
from models import User

router = Router()


def format_page(page: HistoryPage, show_word: bool = True, show_vietnamese: bool = True) -> List[str]:
    """Запись истории целиком, разбитая на сообщения Telegram"""
    record = page.record
    created = record.created_at.strftime("%Y-%m-%d %H:%M") if record.created_at else ""
    header = f"🕒 <b>{created}</b> · {record.word_count} words"
    blocks = [header] + [format_word(word, show_word, show_vietnamese) for word in record.to_batch().words]
    return split_messages(blocks)


async def send_page(message: Message, page: HistoryPage, user: User):
    # клавиатура навигации только у последнего сообщения
    chunks = format_page(page, user.show_word, user.show_vietnamese)
    for chunk in chunks[:-1]:
        await message.answer(chunk, parse_mode="HTML")
    await message.answer(
        chunks[-1],
        parse_mode="HTML",
        reply_markup=history_keyboard(page.record.id, page.has_previous, page.has_next),
    )


@router.message(Command("history"))
async def cmd_history(message: Message, session: AsyncSession):
    user = await get_or_create_user(session, message.from_user.id, first_name=message.from_user.first_name)
    page = await HistoryManager(session, user.telegram_id).page()
    if page is None:
        await message.answer("📭 History is empty. Send me some English text first.")
        return

    await send_page(message, page, user)


@router.callback_query(HistoryCallback.filter())
async def navigate_history(callback: CallbackQuery, callback_data: HistoryCallback, session: AsyncSession):
    user = await get_or_create_user(session, callback.from_user.id, first_name=callback.from_user.first_name)
    history = HistoryManager(session, user.telegram_id)
    page = await history.neighbour(callback_data.record_id, newer=callback_data.action == "newer")
    if page is None:
        await callback.answer("No more entries.", show_alert=True)
        return

    await callback.answer()
    chunks = format_page(page, user.show_word, user.show_vietnamese)
    if len(chunks) > 1:
        # длинную запись не уместить в одно сообщение: убираем старую клавиатуру и шлём заново
        await callback.message.edit_reply_markup(reply_markup=None)
        await send_page(callback.message, page, user)
        return

    await callback.message.edit_text(
        chunks[0],
        parse_mode="HTML",
        reply_markup=history_keyboard(page.record.id, page.has_previous, page.has_next),
    )
