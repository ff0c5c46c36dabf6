import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from gym_auth.core.config import settings

log = logging.getLogger(__name__)

engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def check_connection() -> None:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        log.exception("database ping failed url=%s", engine.url.render_as_string(hide_password=True))
        raise
    log.info("database reachable url=%s", engine.url.render_as_string(hide_password=True))
