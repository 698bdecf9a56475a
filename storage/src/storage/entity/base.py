from sqlalchemy import Column, String
from sqlalchemy.orm import DeclarativeBase
from storage.util import get_utc_iso8601_timestamp


class Base(DeclarativeBase):
    pass


class BaseEntity:
    created_at = Column(String, nullable=False, default=get_utc_iso8601_timestamp)
    updated_at = Column(String, nullable=False, default=get_utc_iso8601_timestamp)
