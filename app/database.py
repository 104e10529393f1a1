from pymongo import MongoClient

from app.config import MONGO_URI, MONGO_DB_NAME

# Create MongoDB client (connects lazily on first operation)
client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=5000, tz_aware=True)

# Get the database
db = client[MONGO_DB_NAME]
