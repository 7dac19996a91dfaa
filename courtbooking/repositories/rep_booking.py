from azure.cosmos import ContainerProxy
from datetime import datetime, timezone
from typing import List, Optional
from courtbooking.models.mod_booking import Booking, BookingStatus, OverlapHit, ResourceKind
from courtbooking.repositories.rep_base import BookingLedger, NotFoundError
from courtbooking.utils.intervals import to_storage

# Only confirmed bookings hold a court, coach or equipment
_OVERLAP_FILTER = "c.status = @status AND c.start_time < @end_time AND c.end_time > @start_time"

_OVERLAP_QUERIES = {
    ResourceKind.COURT: f"SELECT c.id FROM c WHERE c.court_id = @resource_id AND {_OVERLAP_FILTER}",
    ResourceKind.COACH: f"SELECT c.id FROM c WHERE c.coach_id = @resource_id AND {_OVERLAP_FILTER}",
    ResourceKind.EQUIPMENT: (
        "SELECT c.id, e.quantity FROM c JOIN e IN c.equipment_items "
        f"WHERE e.equipment_id = @resource_id AND {_OVERLAP_FILTER}"
    ),
}

class CosmosBookingLedger(BookingLedger):
    def __init__(self, container: ContainerProxy):
        self.container = container

    @staticmethod
    def _to_document(booking: Booking) -> dict:
        document = booking.model_dump(mode="json")
        for field in ("start_time", "end_time", "created_at", "updated_at"):
            document[field] = to_storage(getattr(booking, field))
        return document

    @staticmethod
    def _to_model(item: dict) -> Booking:
        return Booking.model_validate(item)

    def find_overlapping(self, resource_kind: ResourceKind, resource_id: str,
                         start_time: datetime, end_time: datetime) -> List[OverlapHit]:
        items = self.container.query_items(
            query=_OVERLAP_QUERIES[resource_kind],
            parameters=[
                {"name": "@resource_id", "value": resource_id},
                {"name": "@status", "value": BookingStatus.CONFIRMED.value},
                {"name": "@start_time", "value": to_storage(start_time)},
                {"name": "@end_time", "value": to_storage(end_time)},
            ],
            enable_cross_partition_query=True
        )
        return [OverlapHit(booking_id=item["id"], quantity=item.get("quantity")) for item in items]

    def create_booking(self, booking: Booking) -> Booking:
        self.container.create_item(body=self._to_document(booking))
        return booking

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        items = list(self.container.query_items(
            query="SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": booking_id}],
            enable_cross_partition_query=True
        ))
        if items:
            return self._to_model(items[0])
        return None

    def list_user_bookings(self, user_id: str) -> List[Booking]:
        items = self.container.query_items(
            query="SELECT * FROM c WHERE c.user_id = @user_id ORDER BY c.start_time DESC",
            parameters=[{"name": "@user_id", "value": user_id}],
            enable_cross_partition_query=True
        )
        return [self._to_model(item) for item in items]

    def list_bookings(self) -> List[Booking]:
        items = self.container.query_items(
            query="SELECT * FROM c ORDER BY c.start_time DESC",
            enable_cross_partition_query=True
        )
        return [self._to_model(item) for item in items]

    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        existing = self.get_booking(booking_id)
        if existing is None:
            raise NotFoundError("booking", booking_id)
        # The price breakdown is carried over untouched
        updated = existing.model_copy(update={
            "status": status,
            "updated_at": datetime.now(timezone.utc)
        })
        self.container.upsert_item(body=self._to_document(updated))
        return updated
