from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from mindconnect.core import config


Base = declarative_base()


def is_memory_url(database_url: str) -> bool:
    return database_url in {'sqlite://', 'sqlite:///:memory:'}


def build_engine(database_url: str | None = None) -> Engine:
    url = database_url or config.DATABASE_URL

    if is_memory_url(url):
        # One shared connection, otherwise every pooled connection sees its own empty database.
        return create_engine(
            url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )

    if url.startswith('sqlite'):
        return create_engine(url, connect_args={'check_same_thread': False})

    return create_engine(url)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def create_schema(engine: Engine) -> None:
    # Models register their tables on Base when imported.
    from mindconnect.models import appointment, availability, user, zoom_settings  # noqa: F401

    Base.metadata.create_all(bind=engine)
