# app/seo_service.py
from typing import Callable, Optional, Union

import requests

from app import config
from app.errors import PageFetchError
from app.logger_config import logger
from app.report_generator import OpenAIReportGenerator, ReportGenerator
from app.schemas import AIReport, AnalysisResponse, LeadRequest
from app.seo_repository import LeadRepository
from app.seo_rules import build_advice, extract_metrics, extract_page_text, score
from app.utils import normalize_url


def fetch_page(url: str) -> bytes:
    """
    Downloads the page body. One attempt; any failure is a PageFetchError.

    Returns the undecoded bytes so the parser can honour the page's own
    <meta charset> when the server omits a charset in Content-Type.
    """
    try:
        response = requests.get(
            url,
            timeout=config.FETCH_TIMEOUT,
            headers={"User-Agent": config.USER_AGENT},
        )
        logger.info(f"Response status code for {url}: {response.status_code}")
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to fetch {url}: {e}")
        raise PageFetchError("Failed to process URL", detail=str(e)) from e
    return response.content


class SEOService:
    def __init__(
        self,
        page_fetcher: Callable[[str], Union[str, bytes]] = fetch_page,
        report_generator: Optional[ReportGenerator] = None,
        lead_repository: Optional[LeadRepository] = None,
        good_points_target: Optional[int] = None,
    ):
        self.page_fetcher = page_fetcher
        self.report_generator = report_generator or OpenAIReportGenerator()
        self.lead_repository = lead_repository
        if good_points_target is None:
            good_points_target = config.GOOD_POINTS_TARGET
        self.good_points_target = good_points_target

    def analyze(self, url: str) -> AnalysisResponse:
        target = normalize_url(url)
        logger.info(f"Starting SEO analysis for {target}")

        html = self.page_fetcher(target)
        metrics = extract_metrics(html)
        result = score(metrics, good_points_target=self.good_points_target)
        logger.info(f"SEO analysis completed for {target}: score {result.score}")

        return AnalysisResponse(
            tested_url=target,
            metrics=metrics,
            score=result.score,
            good_points=result.good_points,
            bad_points=result.bad_points,
            report=build_advice(metrics, result),
        )

    def friendly_report(self, url: str, report_type: str) -> AIReport:
        target = normalize_url(url)
        logger.info(f"Starting {report_type} AI report for {target}")

        html = self.page_fetcher(target)
        page_text = extract_page_text(html, limit=config.PROMPT_TEXT_LIMIT)
        return self.report_generator.generate(target, page_text, report_type)

    def capture_lead(self, lead: LeadRequest) -> dict:
        if self.lead_repository is None:
            raise RuntimeError("SEOService was created without a lead repository")
        document = self.lead_repository.create_lead(lead)
        logger.info(f"Lead {document['_id']} saved for {lead.url}")
        return document

    def get_lead(self, lead_id: str) -> Optional[dict]:
        if self.lead_repository is None:
            raise RuntimeError("SEOService was created without a lead repository")
        logger.info(f"Fetching lead {lead_id}")
        return self.lead_repository.get_lead_by_id(lead_id)
