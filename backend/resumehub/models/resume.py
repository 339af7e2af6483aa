"""Resume and version history models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from resumehub.database import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Every lookup filters on owner_id; this is the tenant boundary
    owner_id = Column(String(128), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False, default="Untitled Resume")
    template_id = Column(String(128), nullable=False, default="")
    is_public = Column(Boolean, nullable=False, default=False)

    content = Column(JSON, nullable=False)   # {personal_info, education, experience, skills, projects, certifications}
    settings = Column(JSON, nullable=False)  # {font_size, font_family, spacing, color}

    # Set explicitly by the service; the ORM checks the previous value on UPDATE
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    owner = relationship("UserProfile", back_populates="resumes")
    versions = relationship(
        "ResumeVersion",
        back_populates="resume",
        order_by="ResumeVersion.version_number",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}


class ResumeVersion(Base):
    """Append-only revision log entry."""

    __tablename__ = "resume_versions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    resume_id = Column(String(36), ForeignKey("resumes.id"), nullable=False, index=True)
    version_number = Column(Integer, nullable=False)
    changes = Column(Text, nullable=False, default="")
    timestamp = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    resume = relationship("Resume", back_populates="versions")

    __table_args__ = (UniqueConstraint("resume_id", "version_number", name="uq_resume_version"),)
