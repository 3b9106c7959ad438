# qmedic/models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Items, history entries, alerts and export logs all inherit from this class.
    """

    pass
