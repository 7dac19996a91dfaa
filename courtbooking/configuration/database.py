from functools import lru_cache
from azure.cosmos import CosmosClient, ContainerProxy
from azure.identity import DefaultAzureCredential
from courtbooking.configuration.config import Config

@lru_cache(maxsize=1)
def get_database():
    """
    Create the Cosmos client on first use and return the database reference.
    Importing the application does not open a connection.
    """
    client = CosmosClient(
        url=Config.COSMOSDB_ENDPOINT,
        credential=DefaultAzureCredential()
    )
    return client.get_database_client(Config.COSMOSDB_DATABASE_NAME)

@lru_cache(maxsize=None)
def get_container(container_key: str) -> ContainerProxy:
    """
    Dependency that provides the CosmosDB container client
    Args:
        container_key (str): Key of the container to get (bookings, courts, etc.)
    Returns:
        Container client for the specified container
    """
    if container_key not in Config.COSMOSDB_CONTAINER_NAME:
        raise ValueError(f"Container {container_key} not found")
    return get_database().get_container_client(Config.COSMOSDB_CONTAINER_NAME[container_key])
