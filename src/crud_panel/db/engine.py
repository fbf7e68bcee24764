import os

from sqlalchemy import Engine, create_engine


def get_engine() -> Engine:
    db_url = os.getenv("DATABASE_URL", "sqlite:///./crud_panel.db")
    return create_engine(db_url)
