#!/usr/bin/env python3
"""
Скрипт для запуска API сервера
"""
import logging
from pathlib import Path

import uvicorn

import config


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("🚀 Запуск Lexical Extractor API...")

    # Проверяем файл .env
    if not Path(".env").exists():
        print("⚠️  Файл .env не найден, используются значения по умолчанию")
        print(f"📝 DATABASE_URL={config.DATABASE_URL}")

    print(f"🔧 API документация: http://localhost:{config.API_PORT}/docs")
    print("⏹️  Для остановки нажмите Ctrl+C")
    print()

    try:
        uvicorn.run(
            "webapp.server:app",
            host=config.API_HOST,
            port=config.API_PORT,
            reload=True,  # Автоперезагрузка при изменении кода
            log_level=config.LOG_LEVEL.lower(),
        )
    except KeyboardInterrupt:
        print("\n👋 Сервер остановлен")


if __name__ == "__main__":
    main()
