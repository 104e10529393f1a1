from datetime import timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, JSONResponse

from app.logger_config import logger
from app.models import leads_collection
from app.report_generator import REPORT_TYPES
from app.report_renderer import render_report_html
from app.schemas import AIReport, AnalysisResponse, LeadRequest, LeadResponse
from app.seo_repository import LeadRepository
from app.seo_service import SEOService

router = APIRouter()

MISSING_URL_MESSAGE = "Please provide a ?url= parameter"


def get_seo_service() -> SEOService:
    return SEOService(lead_repository=LeadRepository(leads_collection))


def _require_url(url: Optional[str]) -> str:
    if not url or not url.strip():
        raise HTTPException(status_code=400, detail=MISSING_URL_MESSAGE)
    return url


@router.get("/analyze", response_model=AnalysisResponse)   # deterministic SEO score
def analyze(
    url: Optional[str] = None,
    output: str = Query("json", alias="format", pattern="^(json|html)$"),
    service: SEOService = Depends(get_seo_service),
):
    analysis = service.analyze(_require_url(url))
    if output == "html":
        return HTMLResponse(render_report_html(analysis))
    return analysis


@router.get("/friendly", response_model=AIReport)    # LLM generated report
def friendly(
    url: Optional[str] = None,
    report_type: Optional[str] = Query(None, alias="type"),
    service: SEOService = Depends(get_seo_service),
):
    if report_type not in REPORT_TYPES:
        raise HTTPException(status_code=400, detail=f"Missing or invalid type, expected one of {', '.join(REPORT_TYPES)}")
    return service.friendly_report(_require_url(url), report_type)


@router.post("/leads", response_model=LeadResponse, status_code=201)
def create_lead(lead: LeadRequest, service: SEOService = Depends(get_seo_service)):
    document = service.capture_lead(lead)
    return LeadResponse(id=document["_id"], status="saved")


@router.get("/leads/{lead_id}")
def get_lead(lead_id: str, service: SEOService = Depends(get_seo_service)):
    lead = service.get_lead(lead_id)
    if not lead:
        logger.warning(f"Lead with ID {lead_id} not found")
        raise HTTPException(status_code=404, detail="Lead not found")

    lead["id"] = lead.pop("_id")
    created_at = lead.get("created_at")
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)    # stored as UTC
    lead["created_at"] = created_at.isoformat() if created_at else None
    return JSONResponse(lead)
