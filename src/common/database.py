from fastapi import Request
from sqlalchemy import Engine, create_engine


def create_database_engine(database_url: str) -> Engine:
    try:
        return create_engine(database_url, pool_pre_ping=True)
    except Exception as e:
        raise RuntimeError("Failed to create database engine") from e


def get_database_engine(request: Request) -> Engine | None:
    return getattr(request.app.state, "database_engine", None)
