import asyncio

from aiogram import Router, F, html
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery, BufferedInputFile
from sqlalchemy.ext.asyncio import AsyncSession

from handlers.common import StudyCallback, study_keyboard
from history import HistoryManager
from lexical.speech import synthesize
from lexical.study import StudySession, StudyStatus
from lexical.types import Word
from states import StudySetup

router = Router()


async def send_pronunciation(message: Message, word: Word, accent: str = "uk"):
    """Озвучка слова: mp3 словаря, а если его нет - gTTS"""
    url = word.sound_url(accent)
    if url:
        await message.answer_audio(audio=url, title=f"{accent.upper()} pronunciation")
        return

    audio = await asyncio.to_thread(synthesize, word.word, accent)
    if audio:
        await message.answer_audio(
            audio=BufferedInputFile(audio, filename=f"{accent}.mp3"),
            title=f"{accent.upper()} pronunciation",
        )


def card_text(study: StudySession) -> str:
    lines = [f"🎧 <b>Listen & Write</b> · word {study.position} of {study.total}"]
    lines += [html.quote(hint) for hint in study.hints()]
    lines.append("\nType the word:")
    return "\n".join(lines)


def finished_text(study: StudySession) -> str:
    return f"🏁 <b>Session Complete!</b>\nYour score: {study.score} / {study.total}"


async def save(state: FSMContext, study: StudySession):
    await state.update_data(study=study.to_state())


async def load(state: FSMContext):
    data = await state.get_data()
    if "study" not in data:
        return None
    return StudySession.from_state(data["study"])


async def send_card(message: Message, state: FSMContext, study: StudySession):
    await save(state, study)
    if study.finished:
        # данные сессии остаются для "Study Again", а текст снова уходит на извлечение
        await state.set_state(None)
        await message.answer(finished_text(study), parse_mode="HTML", reply_markup=study_keyboard(finished=True))
        return

    await send_pronunciation(message, study.current, "uk")
    await message.answer(
        card_text(study),
        parse_mode="HTML",
        reply_markup=study_keyboard(has_previous=study.index > 0),
    )


async def start_study(message: Message, state: FSMContext, history: HistoryManager, record_id: int = 0):
    record = await history.get(record_id) if record_id else await history.latest()
    if record is None or not record.word_count:
        await message.answer("No words to study. Send me some English text first.")
        return

    study = StudySession(record.to_batch().words)
    await state.set_state(StudySetup.answering)
    await send_card(message, state, study)


@router.message(Command("study"))
async def cmd_study(message: Message, state: FSMContext, session: AsyncSession):
    await start_study(message, state, HistoryManager(session, message.from_user.id))


@router.callback_query(StudyCallback.filter(F.action == "start"))
async def study_from_history(callback: CallbackQuery, callback_data: StudyCallback, state: FSMContext,
                             session: AsyncSession):
    await callback.answer()
    await start_study(callback.message, state, HistoryManager(session, callback.from_user.id), callback_data.record_id)


@router.message(StudySetup.answering, F.text & ~F.text.startswith("/"))
async def handle_answer(message: Message, state: FSMContext):
    study = await load(state)
    if study is None or study.finished:
        await state.clear()
        await message.answer("The session is over. Use /study to start again.")
        return

    word = study.current
    status = study.check_answer(message.text)
    phonetic = f"\n{html.code(html.quote(word.phonetic_uk))}" if word.phonetic_uk else ""

    if status == StudyStatus.CORRECT:
        await message.answer(f"✅ Correct!{phonetic}", parse_mode="HTML")
        study.next()
        await send_card(message, state, study)
        return

    await save(state, study)
    await message.answer(
        f"❌ Correct answer: <b>{html.quote(word.word)}</b>{phonetic}",
        parse_mode="HTML",
        reply_markup=study_keyboard(has_previous=study.index > 0),
    )


@router.callback_query(StudyCallback.filter())
async def study_navigation(callback: CallbackQuery, callback_data: StudyCallback, state: FSMContext):
    study = await load(state)
    if study is None:
        await callback.answer("The session is over. Use /study to start again.", show_alert=True)
        return

    await callback.answer()
    action = callback_data.action

    if action == "stop":
        await state.clear()
        await callback.message.answer(finished_text(study), parse_mode="HTML")
    elif action == "listen" and study.current is not None:
        await send_pronunciation(callback.message, study.current, callback_data.accent)
    elif action == "next":
        study.next()
        await send_card(callback.message, state, study)
    elif action == "prev":
        study.previous()
        await send_card(callback.message, state, study)
    elif action == "restart":
        study.restart()
        await state.set_state(StudySetup.answering)
        await send_card(callback.message, state, study)
