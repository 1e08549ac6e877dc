from .settings import settings
from .database import get_db, init_db, AsyncSessionLocal, Base

__all__ = ["settings", "get_db", "init_db", "AsyncSessionLocal", "Base"]
