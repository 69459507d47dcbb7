"""Parsed query tokens and keyword definitions."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class KeywordDef(BaseModel):
    """A recognized ``key:value`` keyword (or the ``@user`` prefix)."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Keyword key, e.g. 'is' or '@'")
    values: list[str] | Literal["*"] = Field(description="Allowed values or '*' for any")
    format: str = Field(description="Usage format shown in help")
    description: str = Field(default="")
    example: str = Field(default="")


class FilterToken(BaseModel):
    """A recognized keyword token with resolved user ids."""

    key: str = Field(description="Lower-case keyword key")
    value: str = Field(description="Keyword value, case preserved")
    ids: list[str] = Field(default_factory=list, description="Resolved user ids")


class LabelToken(BaseModel):
    """A ``#label name`` token with resolved label ids."""

    token: str = Field(description="Label name without '#', may contain spaces")
    ids: list[str] = Field(default_factory=list, description="Resolved label ids")
