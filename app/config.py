# app/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# MongoDB connection details
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/seo_report")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "seo_report")
LEADS_COLLECTION = os.getenv("LEADS_COLLECTION", "leads")

# OpenAI report generator
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "30"))
PROMPT_TEXT_LIMIT = int(os.getenv("PROMPT_TEXT_LIMIT", "12000"))

# Page fetching
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "10"))
USER_AGENT = os.getenv("USER_AGENT", "seo-report/1.0 (+https://example.com/bot)")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Pad good points with generic statements up to this count (0 disables)
GOOD_POINTS_TARGET = int(os.getenv("GOOD_POINTS_TARGET", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
