# backend/utils/movements.py
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.movement import Movement, MOVEMENT_KINDS
from models.product import Product
from models.users import User
from utils.errors import AppError, InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def normalize_kind(kind) -> str:
    value = str(kind).strip().lower()
    if value not in MOVEMENT_KINDS:
        raise ValidationError("kind deve ser 'entry' ou 'exit'")
    return value


def to_utc(value: datetime) -> datetime:
    # Naive input is taken as UTC, the same clock as the server default
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def signed_delta(kind: str, quantity: int) -> int:
    return quantity if kind == "entry" else -quantity


def record_movement(
    db: Session,
    *,
    product_id: int,
    user_id: int,
    kind: str,
    quantity: int,
    timestamp: Optional[datetime] = None,
    note: Optional[str] = None,
):
    """Apply a stock movement to a product and append it to the history.

    The product update and the movement insert share one transaction: either
    both are committed or the session is rolled back and nothing is left
    behind. The UPDATE is issued as ``quantity = quantity + delta`` so the
    row lock taken by the database serializes concurrent movements on the
    same product.

    Returns ``(movement, product_row)`` where ``product_row`` holds the
    product columns as they are after the update.
    """
    kind = normalize_kind(kind)
    if quantity is None or quantity <= 0:
        raise ValidationError("Informe uma quantidade maior que zero")

    delta = signed_delta(kind, quantity)

    try:
        product_row = db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=Product.quantity + delta)
            .returning(Product.id, Product.name, Product.quantity, Product.minimum_threshold)
            .execution_options(synchronize_session=False)
        ).first()
        if product_row is None:
            raise NotFoundError("Produto não encontrado")

        if db.get(User, user_id) is None:
            raise NotFoundError("Usuário não encontrado")

        movement = Movement(
            product_id=product_id,
            user_id=user_id,
            kind=kind,
            quantity=quantity,
            note=note,
        )
        # Leave the column unset so the server default (now) applies
        if timestamp is not None:
            movement.timestamp = to_utc(timestamp)
        db.add(movement)
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Movement on product %s rolled back", product_id)
        raise InternalError()

    db.refresh(movement)
    logger.info(
        "Movement %s: %s %s on product %s (now %s)",
        movement.id, kind, quantity, product_id, product_row.quantity,
    )
    return movement, product_row
