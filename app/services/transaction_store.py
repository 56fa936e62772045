from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.result import ErrorKind, Result, not_found
from app.models.product import Product
from app.models.transaction import Transaction


class TransactionStore(Protocol):
    def get(self, transaction_id: str) -> Result[Transaction]:
        ...

    def create(self, fields: dict[str, Any]) -> Result[Transaction]:
        ...

    def update(self, transaction_id: str, fields: dict[str, Any]) -> Result[Transaction]:
        ...

    def delete(self, transaction_id: str) -> Result[None]:
        ...


class SqlTransactionStore:
    def __init__(self, db: Session):
        self._db = db

    def _commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

    def get(self, transaction_id: str) -> Result[Transaction]:
        transaction = (
            self._db.execute(
                select(Transaction)
                .options(joinedload(Transaction.product).joinedload(Product.category))
                .where(Transaction.id == transaction_id)
                .execution_options(populate_existing=True)
            )
            .scalars()
            .first()
        )
        if transaction is None:
            return not_found("Transaction", transaction_id)
        return Result.success(transaction)

    def create(self, fields: dict[str, Any]) -> Result[Transaction]:
        transaction = Transaction(**fields)
        self._db.add(transaction)
        try:
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            return Result.failure(
                ErrorKind.INVALID_INPUT,
                "Transaction rejected by the database: {}".format(exc.orig),
            )
        except SQLAlchemyError:
            self._db.rollback()
            raise
        return Result.success(transaction)

    def update(self, transaction_id: str, fields: dict[str, Any]) -> Result[Transaction]:
        transaction = self._db.get(Transaction, transaction_id)
        if transaction is None:
            return not_found("Transaction", transaction_id)
        for name, value in fields.items():
            setattr(transaction, name, value)
        self._commit()
        return self.get(transaction_id)

    def delete(self, transaction_id: str) -> Result[None]:
        transaction = self._db.get(Transaction, transaction_id)
        if transaction is None:
            return not_found("Transaction", transaction_id)
        self._db.delete(transaction)
        self._commit()
        return Result.success(None)


__all__ = ["SqlTransactionStore", "TransactionStore"]
