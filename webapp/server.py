import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

import db
from lexical.client import DictionaryClient
from webapp import api

logger = logging.getLogger(__name__)


def create_app(engine: Optional[AsyncEngine] = None) -> FastAPI:
    engine = engine or db.async_engine

    # Контекстный менеджер для жизненного цикла приложения
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        await db.init_db(engine)
        app.state.session_factory = db.make_session_factory(engine)
        async with DictionaryClient() as client:
            app.state.dictionary = client
            logger.info("✅ API запущено, словарь: %s", client.base_url)
            yield

        # Shutdown
        await engine.dispose()
        logger.info("🔌 Соединение с базой данных закрыто")

    app = FastAPI(
        title="Lexical Extractor API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Проверка работоспособности API"""
        return {"status": "healthy", "message": "Lexical Extractor API is running"}

    app.include_router(api.router)
    return app


app = create_app()
