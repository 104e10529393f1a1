# app/seo_repository.py
import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo.errors import PyMongoError

from app.errors import LeadStorageError
from app.logger_config import logger
from app.schemas import LeadRequest


class LeadRepository:
    """Stores leads captured through the report form."""

    def __init__(self, collection):
        self.collection = collection

    def create_lead(self, lead: LeadRequest) -> dict:
        document = {
            "_id": str(uuid.uuid4()),
            "name": lead.name,
            "email": lead.email,
            "company": lead.company,
            "url": lead.url,
            "report": lead.report,
            "created_at": datetime.now(timezone.utc),
        }
        try:
            self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Error inserting lead for {lead.url}: {e}")
            raise LeadStorageError("Could not save lead", detail=str(e)) from e
        return document

    def get_lead_by_id(self, lead_id: str) -> Optional[dict]:
        try:
            return self.collection.find_one({"_id": lead_id})
        except PyMongoError as e:
            logger.error(f"Error fetching lead {lead_id}: {e}")
            raise LeadStorageError("Could not load lead", detail=str(e)) from e
