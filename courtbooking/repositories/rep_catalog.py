from azure.cosmos import ContainerProxy
from typing import Dict, List, Type
from pydantic import BaseModel
from courtbooking.models.mod_catalog import Coach, Court, Equipment, PricingRule
from courtbooking.repositories.rep_base import CatalogRepository, NotFoundError
from courtbooking.configuration.monitor import log_event

class CosmosCatalogRepository(CatalogRepository):
    """Catalog reads backed by one Cosmos container per collection."""

    def __init__(self, containers: Dict[str, ContainerProxy]):
        self.containers = containers

    def _get_by_id(self, container_key: str, kind: str, item_id: str, model: Type[BaseModel]):
        items = list(self.containers[container_key].query_items(
            query="SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": item_id}],
            enable_cross_partition_query=True
        ))
        if not items:
            log_event(f"{kind.capitalize()} not found", {f"{kind}_id": item_id})
            raise NotFoundError(kind, item_id)
        return model.model_validate(items[0])

    def get_court(self, court_id: str) -> Court:
        return self._get_by_id("courts", "court", court_id, Court)

    def get_coach(self, coach_id: str) -> Coach:
        return self._get_by_id("coaches", "coach", coach_id, Coach)

    def get_equipment(self, equipment_id: str) -> Equipment:
        return self._get_by_id("equipment", "equipment", equipment_id, Equipment)

    def list_active_pricing_rules(self) -> List[PricingRule]:
        items = self.containers["pricingrules"].query_items(
            query="SELECT * FROM c WHERE c.is_active = true",
            enable_cross_partition_query=True
        )
        return [PricingRule.model_validate(item) for item in items]
