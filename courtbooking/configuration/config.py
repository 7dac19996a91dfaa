import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Config:
    # Azure CosmosDB Configuration
    COSMOSDB_ENDPOINT = os.getenv("COSMOS_DB_ENDPOINT")
    COSMOSDB_DATABASE_NAME = os.getenv("COSMOS_DB_DATABASE")
    COSMOSDB_CONTAINER_NAME = {
        "bookings": os.getenv("COSMOS_CONTAINERS_BOOKINGS", "bookings"),
        "courts": os.getenv("COSMOS_CONTAINERS_COURTS", "courts"),
        "coaches": os.getenv("COSMOS_CONTAINERS_COACHES", "coaches"),
        "equipment": os.getenv("COSMOS_CONTAINERS_EQUIPMENT", "equipment"),
        "pricingrules": os.getenv("COSMOS_CONTAINERS_PRICINGRULES", "pricingrules")
    }

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv("AUTH_SECRET_KEY")
    JWT_ALGORITHM = os.getenv("AUTH_ALGORITHM", "HS256")

    # Application Insights
    APPLICATIONINSIGHTS_CONNECTION_STRING = os.getenv("APPINSIGHTS_INSTRUMENTATIONKEY")

    # Hour and weekday of a booking are read in this zone for pricing rules
    BOOKING_TIMEZONE = os.getenv("BOOKING_TIMEZONE", "UTC")
