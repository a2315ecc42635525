import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text, StaticPool
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger("skycast_server.database")


class Base(DeclarativeBase):
    pass


class Database:
    """
    Store handle owning the engine and session factory.

    Built once by the application lifespan and shared through ``app.state``;
    ``dispose()`` releases the connection pool at shutdown.
    """

    def __init__(self, url: str):
        self.url = url
        engine_kwargs = {}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases only exist for a single connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self) -> None:
        # Import registers the tables on Base.metadata
        from app.models import sql  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    @contextmanager
    def session(self):
        db: Session = self.session_factory()
        try:
            yield db
        finally:
            db.close()
