from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from lingo_review.config import settings

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, echo=settings.echo_sql, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db():
    """Create all tables"""
    # Import models so they register with Base.metadata
    import lingo_review.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
