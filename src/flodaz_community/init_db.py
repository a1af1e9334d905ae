"""Create the posts and comments tables for local development."""

from flodaz_community.core.settings import settings
from flodaz_community.db.session import build_engine, create_tables


def init_db(database_url: str | None = None) -> None:
    """Initialize the database by creating all tables."""
    engine = build_engine(database_url or settings.database_url)
    try:
        create_tables(engine)
    finally:
        engine.dispose()


if __name__ == "__main__":
    init_db()
    print("Database initialized.")
