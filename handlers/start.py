from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from handlers.common import SettingsCallback, settings_keyboard
from history import HistoryManager, get_or_create_user, update_settings

router = Router()

HELP_TEXT = (
    "<b>Lexical Extractor</b>\n\n"
    "Send me any English text and I will extract its distinct words with "
    "pronunciation and Vietnamese meanings.\n\n"
    "/history - your past extractions\n"
    "/study - flashcards for the latest extraction\n"
    "/settings - what to show in results\n"
    "/clear - clear history"
)


@router.message(Command("start"))
async def cmd_start(message: Message, state: FSMContext, session: AsyncSession):
    await state.clear()
    await get_or_create_user(
        session,
        message.from_user.id,
        username=message.from_user.username,
        first_name=message.from_user.first_name,
        last_name=message.from_user.last_name,
    )
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(Command("settings"))
async def cmd_settings(message: Message, session: AsyncSession):
    user = await get_or_create_user(session, message.from_user.id, first_name=message.from_user.first_name)
    await message.answer(
        "<b>Display settings:</b>",
        parse_mode="HTML",
        reply_markup=settings_keyboard(user.show_word, user.show_vietnamese),
    )


@router.callback_query(SettingsCallback.filter())
async def toggle_setting(callback: CallbackQuery, callback_data: SettingsCallback, session: AsyncSession):
    user = await get_or_create_user(session, callback.from_user.id, first_name=callback.from_user.first_name)
    if callback_data.field == "show_word":
        user = await update_settings(session, user, show_word=not user.show_word)
    elif callback_data.field == "show_vietnamese":
        user = await update_settings(session, user, show_vietnamese=not user.show_vietnamese)

    await callback.message.edit_reply_markup(
        reply_markup=settings_keyboard(user.show_word, user.show_vietnamese)
    )
    await callback.answer()


@router.message(Command("clear"))
async def cmd_clear(message: Message, session: AsyncSession):
    deleted = await HistoryManager(session, message.from_user.id).clear()
    await message.answer(f"🗑 History cleared ({deleted} entries).")
