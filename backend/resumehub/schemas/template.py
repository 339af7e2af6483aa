"""Template catalog schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TemplateSection(BaseModel):
    id: str
    type: str  # personal_info | education | experience | skills | projects | certifications | custom
    label: str
    required: bool = False
    order: int = 0


class TemplateStyling(BaseModel):
    primary_color: str = "#333333"
    secondary_color: str = "#666666"
    font_family: str = "Arial"
    font_size: str = "12pt"
    spacing: float = 1.15
    layout: str = "single-column"


class TemplateStructure(BaseModel):
    sections: list[TemplateSection] = []
    styling: TemplateStyling = TemplateStyling()

    @field_validator("sections")
    @classmethod
    def unique_section_ids(cls, v: list[TemplateSection]) -> list[TemplateSection]:
        ids = [s.id for s in v]
        if len(ids) != len(set(ids)):
            raise ValueError("section ids must be unique")
        return sorted(v, key=lambda s: s.order)


class TemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    thumbnail: str = ""
    category: str = "general"
    tags: list[str] = []
    popularity: int = Field(default=0, ge=0)
    premium: bool = False
    structure: TemplateStructure = TemplateStructure()
    html: str = ""
    css: str = ""


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    popularity: Optional[int] = Field(default=None, ge=0)
    premium: Optional[bool] = None
    structure: Optional[TemplateStructure] = None
    html: Optional[str] = None
    css: Optional[str] = None


class TemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    thumbnail: str
    category: str
    tags: list[str]
    popularity: int
    premium: bool
    structure: TemplateStructure
    html: str
    css: str
    created_by: str
    created_at: str
    updated_at: str
    is_default: bool = False
