"""Template catalog models.

The regular and default catalogs share one shape and differ only by table,
so callers always say which catalog they mean.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, JSON

from resumehub.database import Base


class _TemplateColumns:
    id = Column(String(128), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    thumbnail = Column(String(1024), nullable=False, default="")
    category = Column(String(100), nullable=False, default="general", index=True)
    tags = Column(JSON, nullable=False, default=list)
    popularity = Column(Integer, nullable=False, default=0, index=True)
    premium = Column(Boolean, nullable=False, default=False)
    structure = Column(JSON, nullable=False)  # {sections: [...], styling: {...}}
    html = Column(Text, nullable=False, default="")
    css = Column(Text, nullable=False, default="")
    created_by = Column(String(128), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


class Template(_TemplateColumns, Base):
    __tablename__ = "templates"

    is_default = False


class DefaultTemplate(_TemplateColumns, Base):
    __tablename__ = "default_templates"

    is_default = True
