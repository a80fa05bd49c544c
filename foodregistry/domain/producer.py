# foodregistry/domain/producer.py
# ORM model for food producers.

from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodregistry.database.base import Base
from foodregistry.utils.data_conversion import to_utc_isoformat

if TYPE_CHECKING:
    from .product import Product

class Producer(Base):
    """
    A producer owning zero or more products.
    Removing a producer removes its products as well.
    """
    __tablename__ = 'producers'

    producer_id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    address: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    products: Mapped[List["Product"]] = relationship(
        "Product",
        back_populates="producer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
    )

    def to_dict(self, product_count: Optional[int] = None) -> Dict[str, Any]:
        data = {
            'producerId': self.producer_id,
            'name': self.name,
            'address': self.address,
            'createdAt': to_utc_isoformat(self.created_at),
            'updatedAt': to_utc_isoformat(self.updated_at),
        }
        if product_count is not None:
            data['productCount'] = product_count
        return data

    def __repr__(self):
        return f"<Producer(id={self.producer_id}, name='{self.name}')>"
