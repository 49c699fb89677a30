import re
from typing import List, Optional, Sequence

from aiogram import html
from aiogram.filters.callback_data import CallbackData
from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from lexical.types import Word

TELEGRAM_MESSAGE_LIMIT = 4096

# тег, HTML-сущность или один символ текста
HTML_TOKEN = re.compile(r"</?\w+[^>]*>|&#?\w+;|.", re.S)
HTML_TAG = re.compile(r"<(/?)(\w+)")


class HistoryCallback(CallbackData, prefix="history"):
    action: str  # older | newer
    record_id: int


class StudyCallback(CallbackData, prefix="study"):
    action: str  # start | prev | next | restart | listen | stop
    record_id: int = 0
    accent: str = "uk"


class SettingsCallback(CallbackData, prefix="settings"):
    field: str  # show_word | show_vietnamese


def format_word(word: Word, show_word: bool = True, show_vietnamese: bool = True) -> str:
    """Карточка слова для чата: слово, транскрипция и значения по частям речи"""
    title = html.bold(html.quote(word.word)) if show_word else "❓"
    if word.phonetic_uk:
        title += f" {html.code(html.quote(word.phonetic_uk))}"

    lines = [title]
    if show_vietnamese:
        for meaning in word.meanings:
            definitions = "; ".join(meaning.definitions)
            lines.append(f"{html.italic(html.quote(meaning.part_of_speech))}: {html.quote(definitions)}")
    return "\n".join(lines)


def cut_html(text: str, limit: int) -> List[str]:
    """Режет строку с HTML-разметкой на части не длиннее limit.

    Сущности и теги не разрываются; открытые теги закрываются в конце части
    и открываются заново в начале следующей.
    """
    parts = []
    open_tags = []  # (имя, открывающий тег)
    reopened = ""
    current = ""

    for token in HTML_TOKEN.findall(text):
        tag = HTML_TAG.match(token) if token.startswith("<") else None
        closers = sum(len(f"</{name}>") for name, _ in open_tags)
        if tag and not tag.group(1):
            closers += len(f"</{tag.group(2)}>")
        elif tag and open_tags and open_tags[-1][0] == tag.group(2):
            closers -= len(f"</{tag.group(2)}>")

        if current != reopened and len(current) + len(token) + closers > limit:
            parts.append(current + "".join(f"</{name}>" for name, _ in reversed(open_tags)))
            reopened = "".join(opening for _, opening in open_tags)
            current = reopened

        current += token
        if tag and tag.group(1):
            if open_tags and open_tags[-1][0] == tag.group(2):
                open_tags.pop()
        elif tag:
            open_tags.append((tag.group(2), token))

    if current != reopened:
        parts.append(current)
    return parts


def split_block(block: str, limit: int) -> List[str]:
    """Делит слишком длинный блок по строкам, длинную строку - через cut_html"""
    pieces = []
    for line in block.split("\n"):
        pieces.extend(cut_html(line, limit) if len(line) > limit else [line])
    return split_messages(pieces, limit, separator="\n")


def split_messages(blocks: Sequence[str], limit: int = TELEGRAM_MESSAGE_LIMIT, separator: str = "\n\n") -> List[str]:
    """Склеивает блоки в сообщения, не превышающие лимит Telegram"""
    messages = []
    current = ""

    for block in blocks:
        if len(block) > limit:
            if current:
                messages.append(current)
                current = ""
            chunks = split_block(block, limit)
            messages.extend(chunks[:-1])
            block = chunks[-1] if chunks else ""

        if not block:
            continue
        if not current:
            current = block
        elif len(current) + len(separator) + len(block) <= limit:
            current += separator + block
        else:
            messages.append(current)
            current = block

    if current:
        messages.append(current)
    return messages


def format_batch(words: Sequence[Word], show_word: bool = True, show_vietnamese: bool = True) -> List[str]:
    header = f"📚 Words found: {len(words)}"
    blocks = [header] + [format_word(w, show_word, show_vietnamese) for w in words]
    return split_messages(blocks)


def history_keyboard(record_id: int, has_previous: bool, has_next: bool) -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    if has_previous:
        builder.button(text="⬅️ Older", callback_data=HistoryCallback(action="older", record_id=record_id))
    if has_next:
        builder.button(text="Newer ➡️", callback_data=HistoryCallback(action="newer", record_id=record_id))
    builder.button(text="🎓 Study", callback_data=StudyCallback(action="start", record_id=record_id))
    if has_previous and has_next:
        builder.adjust(2, 1)
    else:
        builder.adjust(1)
    return builder.as_markup()


def study_keyboard(finished: bool = False, has_previous: bool = True) -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    if finished:
        builder.button(text="🔄 Study Again", callback_data=StudyCallback(action="restart"))
        builder.button(text="⏹ Stop", callback_data=StudyCallback(action="stop"))
        builder.adjust(2)
        return builder.as_markup()

    builder.button(text="🔊 UK", callback_data=StudyCallback(action="listen", accent="uk"))
    builder.button(text="🔊 US", callback_data=StudyCallback(action="listen", accent="us"))
    if has_previous:
        builder.button(text="⬅️ Prev", callback_data=StudyCallback(action="prev"))
    builder.button(text="Next ➡️", callback_data=StudyCallback(action="next"))
    builder.button(text="⏹ Stop", callback_data=StudyCallback(action="stop"))
    builder.adjust(2, 2 if has_previous else 1, 1)
    return builder.as_markup()


def settings_keyboard(show_word: bool, show_vietnamese: bool) -> InlineKeyboardMarkup:
    def mark(flag: Optional[bool]) -> str:
        return "✅" if flag else "⬜️"

    builder = InlineKeyboardBuilder()
    builder.button(text=f"{mark(show_word)} Show word", callback_data=SettingsCallback(field="show_word"))
    builder.button(text=f"{mark(show_vietnamese)} Show Vietnamese", callback_data=SettingsCallback(field="show_vietnamese"))
    builder.adjust(1)
    return builder.as_markup()
