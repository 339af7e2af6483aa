"""Resume, version history, and sharing schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    summary: str = ""


class EducationEntry(BaseModel):
    institution: str
    degree: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class ExperienceEntry(BaseModel):
    company: str
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class SkillEntry(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    level: int = Field(default=0, ge=0, le=5)


class ProjectEntry(BaseModel):
    name: str
    description: str = ""
    url: str = ""
    technologies: list[str] = []


class CertificationEntry(BaseModel):
    name: str
    issuer: str = ""
    date: str = ""
    url: str = ""


class ResumeContent(BaseModel):
    personal_info: PersonalInfo = PersonalInfo()
    education: list[EducationEntry] = []
    experience: list[ExperienceEntry] = []
    skills: list[SkillEntry] = []
    projects: list[ProjectEntry] = []
    certifications: list[CertificationEntry] = []


class ResumeDisplaySettings(BaseModel):
    font_size: str = Field(default="12pt", pattern=r"^\d+(\.\d+)?(pt|px|em|rem)$")
    font_family: str = Field(default="Arial", min_length=1, max_length=100)
    spacing: float = Field(default=1.15, gt=0, le=4)
    color: str = Field(default="#333333", pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class ResumeCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    template_id: Optional[str] = Field(default=None, max_length=128)
    content: Optional[ResumeContent] = None
    settings: Optional[ResumeDisplaySettings] = None


class ResumeUpdate(BaseModel):
    """Partial update. Only fields that are set are applied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    template_id: Optional[str] = Field(default=None, max_length=128)
    content: Optional[ResumeContent] = None
    settings: Optional[ResumeDisplaySettings] = None
    changes: Optional[str] = Field(default=None, max_length=500)  # version history note
    expected_version: Optional[int] = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("title must not be blank")
        return v


class VersionEntry(BaseModel):
    version_number: int
    timestamp: str
    changes: str


class ResumeResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    template_id: str
    is_public: bool
    content: ResumeContent
    settings: ResumeDisplaySettings
    version: int
    versions: list[VersionEntry] = []
    created_at: str
    updated_at: str


class ResumeCreatedResponse(BaseModel):
    id: str


# ── Sharing ──────────────────────────────────────────────────────────────────

class ShareRequest(BaseModel):
    expires_in_days: Optional[int] = Field(default=None, ge=1, le=3650)


class ShareResponse(BaseModel):
    public_url: str


class SharedResumeResponse(BaseModel):
    resume_id: str
    owner_id: str
    title: str
    content: ResumeContent
    template_id: str
    public_url: str
    view_count: int
    created_at: str
    expires_at: Optional[str] = None


class ReconcileResponse(BaseModel):
    flags_set: int
    flags_cleared: int
    orphans_removed: int
