import pytest

from app.errors import MalformedReportError, PageFetchError, ReportGenerationError
from tests.conftest import build_page


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


class TestAnalyze:
    def test_json_report(self, client, pages):
        pages["https://example.com/"] = build_page(images=[None])

        response = client.get("/api/v1/analyze", params={"url": "example.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["tested_url"] == "https://example.com/"
        assert body["score"] == 9
        assert body["metrics"]["images_without_alt_text"] == 1
        assert body["bad_points"] == ["1 of 1 images are missing alt text"]
        assert body["report"]["summary"] == "This site scored 9/10 for SEO."

    def test_html_report_has_lead_form(self, client, pages):
        pages["https://example.com/"] = build_page(description="<script>alert(1)</script>")

        response = client.get("/api/v1/analyze", params={"url": "https://example.com/", "format": "html"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "9/10" in html
        assert 'id="lead-form"' in html
        assert "/api/v1/leads" in html
        assert "<script>alert(1)</script>" not in html

    def test_missing_url(self, client):
        response = client.get("/api/v1/analyze")

        assert response.status_code == 400
        assert response.json()["error"] == "Please provide a ?url= parameter"

    def test_invalid_url(self, client):
        response = client.get("/api/v1/analyze", params={"url": "ftp://example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid URL"

    def test_unknown_format(self, client):
        response = client.get("/api/v1/analyze", params={"url": "example.com", "format": "pdf"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Invalid request"
        assert body["detail"].startswith("query.format:")

    def test_fetch_failure(self, service, client):
        def failing_fetcher(url):
            raise PageFetchError("Failed to process URL", detail="connection refused")

        service.page_fetcher = failing_fetcher

        response = client.get("/api/v1/analyze", params={"url": "example.com"})

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to process URL", "detail": "connection refused"}


class TestFriendly:
    def test_summary_report(self, client, pages, sample_ai_report):
        pages["https://example.com/"] = build_page()

        response = client.get("/api/v1/friendly", params={"url": "example.com", "type": "summary"})

        assert response.status_code == 200
        assert response.json() == sample_ai_report.model_dump()

    @pytest.mark.parametrize("params", [{"url": "example.com"}, {"url": "example.com", "type": "haiku"}])
    def test_missing_or_invalid_type(self, client, params):
        response = client.get("/api/v1/friendly", params=params)
        assert response.status_code == 400

    def test_missing_url(self, client):
        response = client.get("/api/v1/friendly", params={"type": "full"})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "error, message",
        [
            (MalformedReportError("Malformed external response", detail="invalid JSON"), "Malformed external response"),
            (ReportGenerationError("Report generation failed", detail="timeout"), "Report generation failed"),
        ],
    )
    def test_generator_errors(self, client, pages, report_generator, error, message):
        pages["https://example.com/"] = build_page()
        report_generator.error = error

        response = client.get("/api/v1/friendly", params={"url": "example.com", "type": "full"})

        assert response.status_code == 502
        assert response.json()["error"] == message


class TestLeads:
    def test_capture_and_fetch_lead(self, client):
        payload = {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "company": "Analytical Engines",
            "url": "https://example.com/",
            "report": {"score": 9},
        }

        created = client.post("/api/v1/leads", json=payload)

        assert created.status_code == 201
        assert created.json()["status"] == "saved"

        fetched = client.get(f"/api/v1/leads/{created.json()['id']}")
        assert fetched.status_code == 200
        body = fetched.json()
        assert body["id"] == created.json()["id"]
        assert body["email"] == "ada@example.com"
        assert body["report"] == {"score": 9}
        assert body["created_at"].endswith("+00:00")

    def test_invalid_lead(self, client):
        response = client.post("/api/v1/leads", json={"name": "Ada", "email": "nope", "url": "https://example.com/"})

        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request"
        assert "body.email" in response.json()["detail"]

    def test_blank_lead_name(self, client):
        response = client.post("/api/v1/leads", json={"name": "  ", "email": "ada@example.com", "url": "https://example.com/"})

        assert response.status_code == 422
        assert "body.name" in response.json()["detail"]

    def test_unknown_lead(self, client):
        response = client.get("/api/v1/leads/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "Lead not found"


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "detail": None}
