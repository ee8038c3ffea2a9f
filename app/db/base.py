# app/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the Session Calendar service.

    Model modules are imported by `app.db.session` so that `Base.metadata`
    knows every table before the schema is created.
    """
    pass
