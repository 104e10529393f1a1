from types import SimpleNamespace

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.report_generator import ReportGenerator
from app.routers import get_seo_service
from app.schemas import AIReport
from app.seo_repository import LeadRepository
from app.seo_service import SEOService

TITLE_45 = "Handmade Oak Furniture for Every Living Rooms"            # 45 chars
DESCRIPTION_100 = (
    "Browse solid oak tables, chairs and shelves built to order in our workshop and delivered to the door"
)  # 100 chars


def build_page(
    title=TITLE_45,
    description=DESCRIPTION_100,
    canonical="https://example.com/",
    h1="Oak furniture",
    images=(),
):
    head = []
    if title is not None:
        head.append(f"<title>{title}</title>")
    if description is not None:
        head.append(f'<meta name="description" content="{description}">')
    if canonical is not None:
        head.append(f'<link rel="canonical" href="{canonical}">')
    body = []
    if h1 is not None:
        body.append(f"<h1>{h1}</h1>")
    for alt in images:
        body.append('<img src="a.png">' if alt is None else f'<img src="a.png" alt="{alt}">')
    return f"<html><head>{''.join(head)}</head><body>{''.join(body)}</body></html>"


class FakeReportGenerator(ReportGenerator):
    def __init__(self, report=None, error=None):
        self.report = report
        self.error = error
        self.calls = []

    def generate(self, url, page_text, report_type):
        self.calls.append((url, page_text, report_type))
        if self.error:
            raise self.error
        return self.report


def fake_openai_client(content):
    """Mimics openai.OpenAI().chat.completions.create() returning `content`."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    client.calls = calls
    return client


@pytest.fixture
def sample_ai_report():
    return AIReport(
        score=72,
        ai_superpowers=[{"title": "Clear title", "explanation": "The title names the product."}],
        ai_opportunities=[{"title": "Add FAQ", "explanation": "Answer common questions."}],
        ai_engine_insights={"ChatGPT": "Likely to cite the page for oak furniture."},
    )


@pytest.fixture
def lead_repository():
    collection = mongomock.MongoClient().db.leads
    return LeadRepository(collection)


@pytest.fixture
def pages():
    """URL -> HTML map served by the fake fetcher."""
    return {}


@pytest.fixture
def report_generator(sample_ai_report):
    return FakeReportGenerator(report=sample_ai_report)


@pytest.fixture
def service(pages, report_generator, lead_repository):
    def fetcher(url):
        return pages[url]

    return SEOService(
        page_fetcher=fetcher,
        report_generator=report_generator,
        lead_repository=lead_repository,
        good_points_target=0,
    )


@pytest.fixture
def client(service):
    app.dependency_overrides[get_seo_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
