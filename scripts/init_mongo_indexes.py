# Create the indexes used by the employee list endpoint (createdAt desc).
# Usage: set env MONGODB_URI / MONGODB_DB_NAME (or a .env file), then run
# from a machine with access to the database.
# Example: python scripts/init_mongo_indexes.py

from pymongo import MongoClient

from employee_service.core.config import get_settings
from employee_service.repositories.employees import NEWEST_FIRST

settings = get_settings()

client = MongoClient(settings.MONGODB_URI)
employees = client[settings.MONGODB_DB_NAME][settings.MONGODB_COLLECTION_NAME]

name = employees.create_index(NEWEST_FIRST, name="createdAt_desc")

print(f"Ensured index {name} on {settings.MONGODB_DB_NAME}.{settings.MONGODB_COLLECTION_NAME}")
