from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from portfolio_api.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI runs sync routes on a thread pool.
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Largest value a SQLite or PostgreSQL BIGINT primary key can hold.
MAX_ROW_ID = 2**63 - 1


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
