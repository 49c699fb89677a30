import asyncio
import logging

from aiogram import Bot, Dispatcher

import config
from db import DbSessionMiddleware, AsyncSessionLocal, init_db
from handlers import start, browse, study, extract
from lexical.client import DictionaryClient


def build_dispatcher() -> Dispatcher:
    dp = Dispatcher()
    dp.message.middleware(DbSessionMiddleware(AsyncSessionLocal))
    dp.callback_query.middleware(DbSessionMiddleware(AsyncSessionLocal))
    # extract последним: он ловит любой текст
    dp.include_router(start.router)
    dp.include_router(browse.router)
    dp.include_router(study.router)
    dp.include_router(extract.router)
    return dp


async def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not config.BOT_TOKEN:
        raise ValueError("BOT_TOKEN not set in environment variables")

    await init_db()
    bot = Bot(token=config.BOT_TOKEN)
    dp = build_dispatcher()
    async with DictionaryClient() as dictionary:
        await dp.start_polling(bot, dictionary=dictionary)


if __name__ == "__main__":
    asyncio.run(main())
