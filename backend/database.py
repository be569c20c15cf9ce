from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.constants import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency yielding a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
