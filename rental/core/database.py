from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError
from beanie import init_beanie
from rental.core.config import settings


async def init_db(database_url: str = None):
    """
    Initialize MongoDB connection and Beanie ODM.
    """
    client = AsyncIOMotorClient(database_url or settings.DATABASE_URL)
    
    # Selecting the database name from the URL or default
    try:
        db_name = client.get_default_database().name
    except ConfigurationError:
        # No database in the URL
        db_name = None
    if not db_name or db_name == 'test':
        db_name = settings.DATABASE_NAME

    # Import models
    from rental.models import DOCUMENT_MODELS

    # Initialize Beanie
    await init_beanie(
        database=client[db_name],
        document_models=DOCUMENT_MODELS
    )
    return client
