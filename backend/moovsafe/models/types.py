from datetime import datetime, timezone

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import ARRAY

# TEXT[] on PostgreSQL, JSON array elsewhere (SQLite in tests). Both keep order.
StringList = JSON().with_variant(ARRAY(Text), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
