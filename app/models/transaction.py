import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.constants import TransactionType
from app.database.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)

    type = Column(
        Enum(
            TransactionType,
            name="transaction_type",
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float)
    total_amount = Column(Float)
    notes = Column(Text)
    reference = Column(String(100))

    transaction_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    product = relationship("Product", back_populates="transactions")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_transactions_quantity_positive"),
        Index("idx_transactions_product_date", "product_id", "transaction_date"),
    )


__all__ = ["Transaction"]
