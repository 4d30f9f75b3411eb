# backend/routes/movements.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from models.movement import Movement
from models.product import Product
from models.users import User
import schemas.movement as movement_schemas
import schemas.product as product_schemas
from utils.audit import client_ip, write_log
from utils.errors import AuthError, ValidationError
from utils.movements import record_movement
from utils.tokenJWT import get_optional_user

router = APIRouter(prefix="/movimentacoes", tags=["Movements"])


@router.get("", response_model=List[movement_schemas.MovementListItem])
def list_movements(
    product_id: Optional[int] = Query(None, alias="produto_id"),
    db: Session = Depends(get_db),
):
    query = (
        db.query(Movement, Product.name, User.name)
        .join(Product, Product.id == Movement.product_id)
        .join(User, User.id == Movement.user_id)
    )
    if product_id is not None:
        query = query.filter(Movement.product_id == product_id)

    rows = query.order_by(Movement.timestamp.desc(), Movement.id.desc()).all()

    results = []
    for movement, product_name, user_name in rows:
        item = movement_schemas.MovementOut.model_validate(movement).model_dump()
        item.update(product_name=product_name, user_name=user_name)
        results.append(item)
    return results


@router.post("", response_model=movement_schemas.MovementResult)
def create_movement(
    payload: movement_schemas.MovementCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    # The session user is authoritative; the body user_id is only trusted without a token
    user_id = payload.user_id
    if current_user is not None:
        if user_id is not None and user_id != current_user.id:
            raise AuthError("user_id não corresponde ao usuário autenticado")
        user_id = current_user.id

    missing = [
        field for field, value in (
            ("product_id", payload.product_id),
            ("user_id", user_id),
            ("kind", payload.kind),
            ("quantity", payload.quantity),
        )
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Campos obrigatórios: {', '.join(missing)}")

    note = (payload.note or "").strip() or None
    movement, product_row = record_movement(
        db,
        product_id=payload.product_id,
        user_id=user_id,
        kind=payload.kind,
        quantity=payload.quantity,
        timestamp=payload.timestamp,
        note=note,
    )

    write_log(db, user_id=user_id, action="STOCK_MOVEMENT", resource="movements",
              resource_id=movement.id, ip=client_ip(request),
              meta={"product_id": movement.product_id, "kind": movement.kind, "quantity": movement.quantity})

    return {
        "movement": movement_schemas.MovementOut.model_validate(movement),
        "product": product_schemas.ProductOut.model_validate(dict(product_row._mapping)),
    }
