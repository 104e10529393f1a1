from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.schemas import AnalysisResponse
from app.seo_rules import SCORE_MAX

# Set up the Jinja2 environment
env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_report_html(analysis: AnalysisResponse, leads_endpoint: str = "/api/v1/leads") -> str:
    template = env.get_template("report.html")
    return template.render(
        url=analysis.tested_url,
        score=analysis.score,
        score_max=SCORE_MAX,
        score_percent=round(analysis.score * 100 / SCORE_MAX),
        good_points=analysis.good_points,
        bad_points=analysis.bad_points,
        advice=analysis.report,
        report_json=analysis.model_dump(mode="json"),
        leads_endpoint=leads_endpoint,
    )
