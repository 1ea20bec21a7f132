from uuid import UUID

from sqlalchemy.orm import Session

from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate


class CustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, skip: int = 0, limit: int = 100) -> list[Customer]:
        return (
            self.db.query(Customer)
            .order_by(Customer.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(Customer).count()

    def get_by_id(self, customer_id: UUID) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_by_email(self, email: str) -> Customer | None:
        return self.db.query(Customer).filter(Customer.email == email).first()

    def create(self, data: CustomerCreate, password_hash: str | None = None) -> Customer:
        customer = Customer(**data.model_dump(exclude={"password"}), password_hash=password_hash)
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def update(self, customer_id: UUID, data: CustomerUpdate) -> Customer | None:
        customer = self.get_by_id(customer_id)
        if not customer:
            return None
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(customer, key, value)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None
