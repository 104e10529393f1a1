# app/report_generator.py
import json
from abc import ABC, abstractmethod
from typing import Optional

import openai
from pydantic import ValidationError

from app import config
from app.errors import MalformedReportError, ReportGenerationError
from app.logger_config import logger
from app.schemas import AIReport

REPORT_TYPES = ("summary", "full")

SYSTEM_PROMPT = (
    "You are an SEO analyst who explains how well a web page is prepared for "
    "AI-driven search engines. You output strict JSON only."
)

RESPONSE_SHAPE = (
    '{"score": <integer 0-100>, '
    '"ai_superpowers": [{"title": "...", "explanation": "..."}], '
    '"ai_opportunities": [{"title": "...", "explanation": "..."}], '
    '"ai_engine_insights": {"<engine name>": "..."}}'
)


def build_prompt(url: str, page_text: str, report_type: str) -> str:
    if report_type == "summary":
        task = "Summarize the AI-SEO strengths and opportunities of this page in 3 items each."
    else:
        task = (
            "Provide a detailed AI-SEO report for this page: list every strength "
            "(superpowers) and every opportunity, and add one insight per major AI engine."
        )
    return (
        f"{task}\n"
        f"Answer with a JSON object of this exact shape: {RESPONSE_SHAPE}\n\n"
        f"URL: {url}\n"
        f"Page text:\n{page_text}"
    )


def parse_report(content: Optional[str]) -> AIReport:
    """Validates a raw model answer against the AIReport schema."""
    if not content or not content.strip():
        raise MalformedReportError("Malformed external response", detail="empty completion")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedReportError("Malformed external response", detail=f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedReportError("Malformed external response", detail="expected a JSON object")
    try:
        return AIReport.model_validate(data)
    except ValidationError as e:
        raise MalformedReportError(
            "Malformed external response",
            detail=f"{e.error_count()} schema error(s): {e.errors()[0]['msg']}",
        ) from e


class ReportGenerator(ABC):
    """Produces a structured AI-SEO report for a page."""

    @abstractmethod
    def generate(self, url: str, page_text: str, report_type: str) -> AIReport:
        ...


class OpenAIReportGenerator(ReportGenerator):
    def __init__(self, client=None, model: Optional[str] = None):
        self._client = client
        self.model = model or config.OPENAI_MODEL

    @property
    def client(self):
        if self._client is None:
            if not config.OPENAI_API_KEY:
                raise ReportGenerationError("Report generation failed", detail="OPENAI_API_KEY is not set")
            self._client = openai.OpenAI(api_key=config.OPENAI_API_KEY, timeout=config.OPENAI_TIMEOUT)
        return self._client

    def generate(self, url: str, page_text: str, report_type: str) -> AIReport:
        if report_type not in REPORT_TYPES:
            raise ValueError(f"Unknown report type: {report_type}")

        prompt = build_prompt(url, page_text, report_type)
        logger.info(f"Requesting {report_type} AI report for {url} from model {self.model}")
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI request failed for {url}: {e}")
            raise ReportGenerationError("Report generation failed", detail=str(e)) from e

        if not completion.choices:
            raise MalformedReportError("Malformed external response", detail="no choices returned")
        content = completion.choices[0].message.content
        report = parse_report(content)
        logger.info(f"AI report for {url} validated (score {report.score})")
        return report
