"""Pydantic model for cover letters."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Lang = Literal["fr", "en"]


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class LmModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    lang: Lang = "fr"
    name: str = ""
    contact_lines: list[str] = Field(
        default_factory=list, validation_alias=_alias("contact_lines", "contactLines")
    )
    service: str = ""
    company_name: str = Field(
        default="", validation_alias=_alias("company_name", "companyName")
    )
    company_addr: str = Field(
        default="", validation_alias=_alias("company_addr", "companyAddr")
    )
    city: str = ""
    date_str: str = Field(default="", validation_alias=_alias("date_str", "dateStr"))
    a_prefix: str = Field(default="", validation_alias=_alias("a_prefix", "aPrefix"))
    subject: str = ""
    salutation: str = ""
    body: str = ""
    closing: str = ""
    signature: str = ""

    @property
    def company_addr_lines(self) -> list[str]:
        return [line.strip() for line in self.company_addr.splitlines() if line.strip()]
