from app.config import LEADS_COLLECTION
from app.database import db

leads_collection = db[LEADS_COLLECTION]
