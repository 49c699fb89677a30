from sqlalchemy.orm import declarative_base

Base = declarative_base()

from models.users import User  # noqa: E402
from models.extractions import Extraction  # noqa: E402

__all__ = ["Base", "User", "Extraction"]
