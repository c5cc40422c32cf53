"""Pydantic models for CV documents."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

SKILL_CATEGORIES = ("cloud", "security", "systems", "automation", "tools", "soft")


class CvSkills(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    cloud: list[str] = Field(default_factory=list)
    security: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("security", "sec")
    )
    systems: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("systems", "sys")
    )
    automation: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("automation", "auto")
    )
    tools: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)

    def flatten(self) -> list[str]:
        """All skill names, category by category."""
        return [item for key in SKILL_CATEGORIES for item in getattr(self, key)]

    def is_empty(self) -> bool:
        return not self.flatten()


class XpEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    company: str = ""
    city: str = ""
    role: str = ""
    dates: str = ""
    bullets: list[str] = Field(default_factory=list)


class CvDocModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = ""
    title: str = ""
    contact_line: str = Field(
        default="",
        validation_alias=AliasChoices("contact_line", "contactLine", "contact"),
    )
    profile: str = ""
    skills: CvSkills = Field(default_factory=CvSkills)
    xp: list[XpEntry] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    certs: str = ""
    lang_line: str = Field(
        default="", validation_alias=AliasChoices("lang_line", "langLine")
    )
    hobbies: list[str] = Field(default_factory=list)
