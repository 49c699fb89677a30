from sqlalchemy import Column, BigInteger, String, Boolean, DateTime, func

from models import Base


class User(Base):
    __tablename__ = "users"

    telegram_id = Column(BigInteger, primary_key=True)
    username = Column(String(32), nullable=True)
    first_name = Column(String(64), nullable=False, default="User")
    last_name = Column(String(64), nullable=True)

    # Настройки отображения результатов
    show_word = Column(Boolean, nullable=False, default=True)
    show_vietnamese = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())
