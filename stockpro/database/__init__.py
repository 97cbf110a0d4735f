from .session import engine, AsyncSessionLocal, Base, get_db, init_db

__all__ = ["engine", "AsyncSessionLocal", "Base", "get_db", "init_db"]
