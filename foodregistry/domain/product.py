# foodregistry/domain/product.py
# ORM model for registered food products.

from datetime import datetime, timezone
from typing import Optional, Dict, Any, TYPE_CHECKING
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodregistry.database.base import Base
from foodregistry.utils.data_conversion import to_utc_isoformat

if TYPE_CHECKING:
    from .producer import Producer

class Product(Base):
    """
    A food product. Every product belongs to exactly one producer.
    """
    __tablename__ = 'products'

    product_id: Mapped[int] = mapped_column("id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[Optional[str]] = mapped_column(String(50))
    image_url: Mapped[Optional[str]] = mapped_column(String(500))
    producer_id: Mapped[int] = mapped_column(
        ForeignKey('producers.id', ondelete='CASCADE'), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    producer: Mapped["Producer"] = relationship(back_populates="products")

    def to_dict(self) -> Dict[str, Any]:
        """Serializes with the camelCase keys the frontend expects."""
        return {
            'productId': self.product_id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'imageUrl': self.image_url,
            'producerId': self.producer_id,
            'createdAt': to_utc_isoformat(self.created_at),
            'updatedAt': to_utc_isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Product(id={self.product_id}, name='{self.name}', producer_id={self.producer_id})>"
