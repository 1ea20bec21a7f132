from enum import Enum

from sqlalchemy import JSON, Column, DateTime, String, Text, func

from app.core.database import Base
from app.models.shared import Money, UUIDType, generate_uuid


class ProductCategory(str, Enum):
    STONES = "stones"
    PAVERS = "pavers"
    GARDEN_CARE = "garden_care"
    SERVICES = "services"


PRODUCT_CATEGORY_LABELS = {
    ProductCategory.STONES: "Pedras Ornamentais",
    ProductCategory.PAVERS: "Bloquetes e Pavers",
    ProductCategory.GARDEN_CARE: "Cuidados e Limpeza",
    ProductCategory.SERVICES: "Serviços e Mão de Obra",
}


class Product(Base):
    __tablename__ = "products"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    usage = Column(Text, nullable=True)
    measurements = Column(String(255), nullable=True)
    price = Column(Money, nullable=False)
    category = Column(String(30), nullable=False, index=True)
    # Sale unit shown next to the price: m², saco, unidade...
    unit = Column(String(30), nullable=True)
    image_url = Column(String(500), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
