import re
import time
from functools import wraps
from typing import List, Union

from bs4 import BeautifulSoup

from app.logger_config import logger
from app.schemas import Advice, PageMetrics, ScoreResult

SCORE_MAX = 10
SCORE_FLOOR = 1

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 160

MISSING_TITLE_PENALTY = 2
TITLE_LENGTH_PENALTY = 1
MISSING_DESCRIPTION_PENALTY = 2
DESCRIPTION_LENGTH_PENALTY = 1
MISSING_CANONICAL_PENALTY = 1
MISSING_HEADING_PENALTY = 1
MISSING_ALT_PENALTY = 1
MAX_ALT_PENALTY = 3

MAX_GOOD_POINTS = 10
MAX_BAD_POINTS = 15

# Padding for good_points_target, appended in this order
GENERIC_GOOD_POINTS = [
    "The page is reachable and returns HTML content",
    "The page can be parsed by search engine crawlers",
    "The page exposes a document structure search engines can read",
    "The page is a candidate for search result snippets",
    "The page markup is readable by accessibility tools",
]

_DESCRIPTION_NAME = re.compile(r"^\s*description\s*$", re.IGNORECASE)


def measure_execution_time(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            execution_time = round(time.perf_counter() - start_time, 4)
            logger.debug(f"{func.__name__} executed in {execution_time} seconds")
    return wrapper


def _is_canonical_link(tag) -> bool:
    if tag.name != "link":
        return False
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return any(value.lower() == "canonical" for value in rel)


def _parse(html: Union[str, bytes, None]) -> BeautifulSoup:
    if isinstance(html, bytes):
        # raw response body; BeautifulSoup sniffs <meta charset> and BOMs
        return BeautifulSoup(html, "lxml")
    # lxml feeds utf-8 internally, lone surrogates would not survive it
    return BeautifulSoup((html or "").encode("utf-8", "replace"), "lxml", from_encoding="utf-8")


# Metrics extraction
@measure_execution_time
def extract_metrics(html: Union[str, bytes, None]) -> PageMetrics:
    """
    Parses raw HTML (text or undecoded response bytes) into a PageMetrics value.

    Malformed or empty markup never raises: elements that cannot be found
    produce empty strings, zero counts and False flags.
    """
    if not html or not html.strip():
        return PageMetrics(empty_document=True)

    soup = _parse(html)

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    meta_tag = soup.find("meta", attrs={"name": _DESCRIPTION_NAME})
    meta_description = (meta_tag.get("content") or "").strip() if meta_tag else ""

    canonical_tag = soup.find(_is_canonical_link)
    canonical_url = (canonical_tag.get("href") or "").strip() if canonical_tag else ""

    has_heading = any(h1.get_text().strip() for h1 in soup.find_all("h1"))

    images = soup.find_all("img")
    images_without_alt = sum(1 for img in images if not (img.get("alt") or "").strip())

    return PageMetrics(
        title=title,
        title_length=len(title),
        meta_description=meta_description,
        meta_description_length=len(meta_description),
        canonical_url=canonical_url,
        has_heading=has_heading,
        total_images=len(images),
        images_without_alt_text=images_without_alt,
    )


def extract_page_text(html: Union[str, bytes, None], limit: int) -> str:
    """Visible text of the page, whitespace-collapsed and cut to `limit` characters."""
    soup = _parse(html)
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    text = " ".join(" ".join(soup.stripped_strings).split())
    return text[:limit]


# Scoring
@measure_execution_time
def score(metrics: PageMetrics, good_points_target: int = 0) -> ScoreResult:
    total = SCORE_MAX
    good: List[str] = []
    bad: List[str] = []

    # Title
    if not metrics.title:
        total -= MISSING_TITLE_PENALTY
        bad.append("Missing title tag - add a concise, descriptive page title")
    elif not TITLE_MIN_LENGTH <= metrics.title_length <= TITLE_MAX_LENGTH:
        total -= TITLE_LENGTH_PENALTY
        bad.append(
            f"Title length is {metrics.title_length} characters "
            f"(aim for {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH})"
        )
    else:
        good.append(f"Title tag has an optimal length ({metrics.title_length} characters)")

    # Meta description
    if not metrics.meta_description:
        total -= MISSING_DESCRIPTION_PENALTY
        bad.append("Missing meta description - add a short, compelling summary of the page")
    elif not DESCRIPTION_MIN_LENGTH <= metrics.meta_description_length <= DESCRIPTION_MAX_LENGTH:
        total -= DESCRIPTION_LENGTH_PENALTY
        bad.append(
            f"Meta description length is {metrics.meta_description_length} characters "
            f"(aim for {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH})"
        )
    else:
        good.append(
            f"Meta description has an optimal length ({metrics.meta_description_length} characters)"
        )

    # Canonical
    if metrics.canonical_url:
        good.append("Canonical URL is declared")
    else:
        total -= MISSING_CANONICAL_PENALTY
        bad.append("No canonical URL - declare one to avoid duplicate content issues")

    # Heading
    if metrics.has_heading:
        good.append("Page has a top-level H1 heading")
    else:
        total -= MISSING_HEADING_PENALTY
        bad.append("No H1 heading found - add a single top-level heading")

    # Image alt text
    if metrics.images_without_alt_text:
        total -= min(MAX_ALT_PENALTY, metrics.images_without_alt_text * MISSING_ALT_PENALTY)
        bad.append(
            f"{metrics.images_without_alt_text} of {metrics.total_images} images are missing alt text"
        )
    elif metrics.total_images:
        good.append(f"All {metrics.total_images} images have alt text")

    if metrics.empty_document:
        total = SCORE_FLOOR
        bad.append("The page returned no content")

    total = max(SCORE_FLOOR, min(SCORE_MAX, total))

    target = min(good_points_target, MAX_GOOD_POINTS)
    for filler in GENERIC_GOOD_POINTS:
        if len(good) >= target:
            break
        good.append(filler)

    return ScoreResult(
        score=total,
        good_points=good[:MAX_GOOD_POINTS],
        bad_points=bad[:MAX_BAD_POINTS],
    )


def build_advice(metrics: PageMetrics, result: ScoreResult) -> Advice:
    """Plain-language editing advice to go with a score."""
    if metrics.title:
        title_advice = (
            f'Your title is "{metrics.title}". Keep it under ~{TITLE_MAX_LENGTH} characters '
            f"and make it state clearly what the page is about."
        )
    else:
        title_advice = (
            f"No title found. Add a clear, concise title (under ~{TITLE_MAX_LENGTH} characters)."
        )

    if metrics.meta_description:
        description_advice = (
            f'Your meta description is "{metrics.meta_description}". Keep it under '
            f"~{DESCRIPTION_MAX_LENGTH} characters and make it compelling."
        )
    else:
        description_advice = (
            f"No meta description found. Add a short, compelling description "
            f"(under ~{DESCRIPTION_MAX_LENGTH} characters)."
        )

    return Advice(
        summary=f"This site scored {result.score}/{SCORE_MAX} for SEO.",
        title_advice=title_advice,
        description_advice=description_advice,
        extra_advice=(
            "Consider adding structured data, improving page speed, "
            "and making sure the page works well on mobile devices."
        ),
    )
