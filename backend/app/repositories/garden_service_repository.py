from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.sorting import apply_order_by
from app.models.garden_service import GardenService
from app.schemas.garden_service import GardenServiceCreate, GardenServiceUpdate


class GardenServiceRepository:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self, category: str | None = None, search: str | None = None
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(GardenService)
        if category:
            query = query.filter(GardenService.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(GardenService.name.ilike(pattern), GardenService.description.ilike(pattern))
            )
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        category: str | None = None,
        search: str | None = None,
        order_by: str | None = None,
    ) -> list[GardenService]:
        query = apply_order_by(self._filtered(category, search), GardenService, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, category: str | None = None, search: str | None = None) -> int:
        return self._filtered(category, search).count()

    def get_by_id(self, service_id: UUID) -> GardenService | None:
        return self.db.query(GardenService).filter(GardenService.id == service_id).first()

    def create(self, data: GardenServiceCreate) -> GardenService:
        service = GardenService(**data.model_dump())
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def update(self, service_id: UUID, data: GardenServiceUpdate) -> GardenService | None:
        service = self.get_by_id(service_id)
        if not service:
            return None
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(service, key, value)
        self.db.commit()
        self.db.refresh(service)
        return service

    def delete(self, service_id: UUID) -> bool:
        service = self.get_by_id(service_id)
        if not service:
            return False
        self.db.delete(service)
        self.db.commit()
        return True
