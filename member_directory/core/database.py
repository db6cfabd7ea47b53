# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""MongoDB client singleton.

MongoClient connects lazily, so importing this module never touches the
network. The lifespan hook in main.py pings the server at startup.
"""
from pymongo import MongoClient
from pymongo.collection import Collection

from member_directory.core.config import settings

client: MongoClient = MongoClient(
    settings.MONGO_URI,
    appname=settings.SERVICE_NAME,
    connectTimeoutMS=settings.MONGO_CONNECT_TIMEOUT_MS,
    serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
)


def get_collection() -> Collection:
    return client[settings.MONGO_DB][settings.MONGO_COLLECTION]
