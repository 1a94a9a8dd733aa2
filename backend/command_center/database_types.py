"""
Custom SQLAlchemy types shared by the Command Center models.

Production runs on PostgreSQL (Supabase); tests run on SQLite. Each type
picks the native PostgreSQL representation when available and falls back
to a text encoding elsewhere.
"""
import enum
import json
import uuid
from typing import Type

from sqlalchemy import CHAR, Text, TypeDecorator, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import ARRAY, UUID, JSONB as PostgreSQLJSONB


class GUID(TypeDecorator):
    """
    UUID primary/foreign keys.

    PostgreSQL stores a native UUID; SQLite stores the canonical
    36-character string.
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class JSON(TypeDecorator):
    """
    Free-form metadata payloads (analytics, notifications, AI interactions).

    JSONB on PostgreSQL, JSON-encoded TEXT on SQLite.
    """
    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PostgreSQLJSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return json.loads(value)


class StringList(TypeDecorator):
    """
    Skill, interest and requirement lists.

    text[] on PostgreSQL (matches the Supabase schema), JSON array text on SQLite.
    """
    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(ARRAY(Text()))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        value = [str(item) for item in value]
        if dialect.name == 'postgresql':
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return []
        if dialect.name == 'postgresql':
            return list(value)
        return json.loads(value)


def enum_column_type(enum_cls: Type[enum.Enum], name: str) -> SQLEnum:
    """
    Enum column that stores member *values* ("pending_review"), not names.

    The dashboard and the database share the lowercase string values, so
    a status is always one of the closed set.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
