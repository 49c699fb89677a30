from typing import Optional


class LexicalError(Exception):
    """Базовая ошибка конвейера извлечения слов"""


class NetworkError(LexicalError):
    """HTTP-запрос не удался: плохой статус, обрыв соединения или нечитаемый ответ"""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else reason
        super().__init__(f"{url}: {detail}" if detail else url)


class BatchFailure(LexicalError):
    """Неожиданный сбой всей обработки текста"""
