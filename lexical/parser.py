import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from lexical.types import Meaning

logger = logging.getLogger(__name__)

TRANSCRIPTION_CONTAINER = ".word_tab_title_0"
# rel="0" - вкладка Anh-Việt
EN_VI_CONTENT = 'li.slide_content[rel="0"] .content'
PART_OF_SPEECH_CLASS = "bg-grey"
DEFINITION_CLASSES = {"green", "bold"}

Markup = Union[str, BeautifulSoup, Tag]


def make_soup(html: Markup) -> Union[BeautifulSoup, Tag]:
    if isinstance(html, Tag):
        return html
    return BeautifulSoup(html or "", "html.parser")


def _first_child(node: Optional[Tag]) -> Optional[Tag]:
    if node is None:
        return None
    return node.find(True, recursive=False)


def _classes(node: Tag) -> set:
    return set(node.get("class") or [])


def parse_transcription(html: Markup) -> str:
    """Транскрипция: первый ребёнок первого ребёнка блока .word_tab_title_0"""
    try:
        soup = make_soup(html)
        node = _first_child(_first_child(soup.select_one(TRANSCRIPTION_CONTAINER)))
        return node.get_text() if node is not None else ""
    except Exception:
        logger.warning("⚠️ Не удалось разобрать транскрипцию", exc_info=True)
        return ""


def parse_meanings(html: Markup) -> List[Meaning]:
    """Части речи и вьетнамские значения из вкладки Anh-Việt.

    Для каждого блока div.bg-grey берётся подпись из <span>, затем идём по
    соседним элементам до следующего bg-grey и собираем тексты элементов
    с классами green + bold. Ошибки разметки не пробрасываются наружу.
    """
    meanings: List[Meaning] = []

    try:
        soup = make_soup(html)
        content = soup.select_one(EN_VI_CONTENT)
        if content is None:
            logger.debug("Вкладка Anh-Việt не найдена")
            return meanings

        for pos_section in content.select(f"div.{PART_OF_SPEECH_CLASS}"):
            title = pos_section.find("span")
            if title is None:
                continue
            part_of_speech = title.get_text().strip()
            if not part_of_speech:
                continue

            definitions = []
            current = pos_section.find_next_sibling()
            while current is not None and PART_OF_SPEECH_CLASS not in _classes(current):
                text = current.get_text().strip()
                if DEFINITION_CLASSES <= _classes(current) and text:
                    definitions.append(text)
                current = current.find_next_sibling()

            if definitions:
                meanings.append(Meaning(part_of_speech=part_of_speech, definitions=definitions))
    except Exception:
        logger.warning("⚠️ Ошибка при разборе значений, оставляем то, что успели собрать", exc_info=True)

    return meanings
