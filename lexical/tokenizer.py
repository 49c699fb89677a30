import re
from typing import List

# Всё, что не буква, не цифра, не "_" и не "-", считается разделителем
SEPARATOR = re.compile(r"[^\w-]+")


def tokenize(text: str) -> List[str]:
    """Разбивает текст на уникальные слова в нижнем регистре (в порядке появления)"""
    seen = set()
    words = []

    for piece in SEPARATOR.split(text or ""):
        if not piece:
            continue
        # заменяется только первый дефис: "a-b-c" -> "a b-c"
        word = piece.lower().replace("-", " ", 1).strip()
        if not word or word in seen:
            continue
        seen.add(word)
        words.append(word)

    return words
