import random
from enum import Enum
from typing import List, Optional, Sequence

from lexical.types import Word


class StudyStatus(str, Enum):
    IDLE = "idle"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class StudySession:
    """Карточки "послушай и напиши": слова в случайном порядке, счёт правильных ответов"""

    def __init__(self, words: Sequence[Word], rng: Optional[random.Random] = None):
        self.words: List[Word] = list(words)
        self.rng = rng or random.Random()
        self.order: List[int] = []
        self.index = 0
        self.score = 0
        self.status = StudyStatus.IDLE
        self.finished = False
        self.restart()

    def restart(self):
        self.order = list(range(len(self.words)))
        self.rng.shuffle(self.order)
        self.index = 0
        self.score = 0
        self.status = StudyStatus.IDLE
        self.finished = not self.order

    @property
    def total(self) -> int:
        return len(self.order)

    @property
    def position(self) -> int:
        """Номер текущей карточки, начиная с 1"""
        return self.index + 1 if self.order else 0

    @property
    def progress(self) -> float:
        if not self.order:
            return 100.0
        return self.index / self.total * 100

    @property
    def current(self) -> Optional[Word]:
        if self.finished or not self.order:
            return None
        return self.words[self.order[self.index]]

    def check_answer(self, answer: str) -> StudyStatus:
        word = self.current
        if word is None:
            return self.status
        if self.status == StudyStatus.CORRECT:
            return self.status

        if (answer or "").strip().lower() == word.word.lower():
            self.status = StudyStatus.CORRECT
            self.score += 1
        else:
            self.status = StudyStatus.INCORRECT
        return self.status

    def next(self) -> Optional[Word]:
        if self.finished:
            return None
        if self.index < self.total - 1:
            self.index += 1
            self.status = StudyStatus.IDLE
            return self.current
        self.finished = True
        return None

    def previous(self) -> Optional[Word]:
        if self.finished or self.index == 0:
            return self.current
        self.index -= 1
        self.status = StudyStatus.IDLE
        return self.current

    def hints(self, limit: int = 2) -> List[str]:
        word = self.current
        if word is None:
            return []
        return [
            f"{meaning.part_of_speech}: {meaning.definitions[0]}"
            for meaning in word.meanings[:limit]
            if meaning.definitions
        ]

    def to_state(self) -> dict:
        return {
            "words": [word.model_dump() for word in self.words],
            "order": list(self.order),
            "index": self.index,
            "score": self.score,
            "status": self.status.value,
            "finished": self.finished,
        }

    @classmethod
    def from_state(cls, state: dict, rng: Optional[random.Random] = None) -> "StudySession":
        session = cls([Word.model_validate(w) for w in state.get("words", [])], rng=rng)
        order = state.get("order")
        if order is not None and sorted(order) == list(range(len(session.words))):
            session.order = list(order)
            session.index = min(int(state.get("index", 0)), max(len(order) - 1, 0))
            session.score = int(state.get("score", 0))
            session.status = StudyStatus(state.get("status", StudyStatus.IDLE.value))
            session.finished = bool(state.get("finished", False)) or not order
        return session
