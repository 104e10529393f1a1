import re
from typing import Optional, Dict, List, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PageMetrics(BaseModel):
    """SEO signals extracted from a single HTML document. Frozen after creation."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    title_length: int = Field(default=0, ge=0)
    meta_description: str = ""
    meta_description_length: int = Field(default=0, ge=0)
    canonical_url: str = ""
    has_heading: bool = False
    total_images: int = Field(default=0, ge=0)
    images_without_alt_text: int = Field(default=0, ge=0)
    empty_document: bool = False

    @model_validator(mode="after")
    def check_counts(self):
        if self.images_without_alt_text > self.total_images:
            raise ValueError("images_without_alt_text cannot exceed total_images")
        return self


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    good_points: List[str] = Field(default_factory=list)
    bad_points: List[str] = Field(default_factory=list)


class Advice(BaseModel):
    summary: str
    title_advice: str
    description_advice: str
    extra_advice: str


class AnalysisResponse(BaseModel):
    tested_url: str
    metrics: PageMetrics
    score: int
    good_points: List[str]
    bad_points: List[str]
    report: Advice


# LLM ("friendly") report

class Insight(BaseModel):
    title: str = Field(min_length=1)
    explanation: str = ""


class AIReport(BaseModel):
    score: int = Field(ge=0, le=100)
    ai_superpowers: List[Insight]
    ai_opportunities: List[Insight]
    ai_engine_insights: Dict[str, str] = Field(default_factory=dict)


# Lead capture

class LeadRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(max_length=320)
    company: Optional[str] = Field(default=None, max_length=200)
    url: str = Field(min_length=1, max_length=2048)
    report: Optional[Dict[str, Any]] = None

    @field_validator("name", "company", "url", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value):
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value.strip()):
            raise ValueError("invalid email address")
        return value.strip().lower()


class LeadResponse(BaseModel):
    id: str
    status: str
