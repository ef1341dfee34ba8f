from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from cinema_booking.core.config import settings

# SQLite (local runs, tests) needs its connection shared across the threadpool
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """One session per request; closed (and its connection returned) afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
