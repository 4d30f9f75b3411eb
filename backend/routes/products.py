# backend/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from models.movement import Movement
from models.product import Product
import schemas.product as product_schemas
from utils.audit import client_ip, write_log
from utils.errors import ConflictError, NotFoundError, ValidationError

router = APIRouter(prefix="/produtos", tags=["Products"])


def _get_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Produto não encontrado")
    return product


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    q: Optional[str] = Query(None, description="Busca por nome (sem distinção de maiúsculas)"),
    db: Session = Depends(get_db),
):
    query = db.query(Product)

    term = (q or "").strip()
    if term:
        query = query.filter(Product.name.ilike(f"%{term}%"))

    return query.order_by(Product.name.asc(), Product.id.asc()).all()


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, product_id)


# =========================
# CREATE PRODUCT
# =========================
@router.post("", response_model=product_schemas.ProductOut)
def add_product(payload: product_schemas.ProductCreate, request: Request, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("Campo obrigatório: name")

    new_product = Product(
        name=name,
        quantity=payload.quantity,
        minimum_threshold=payload.minimum_threshold,
    )
    db.add(new_product)
    db.commit()
    db.refresh(new_product)

    write_log(db, user_id=None, action="PRODUCT_CREATE", resource="products",
              resource_id=new_product.id, ip=client_ip(request), meta={"name": new_product.name})
    return new_product


# =========================
# UPDATE PRODUCT (merge of the supplied fields)
# =========================
@router.put("/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, product_id)

    changes = payload.changes()
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise ValidationError("O nome do produto não pode ficar vazio")

    for key, value in changes.items():
        setattr(product, key, value)

    db.commit()
    db.refresh(product)

    write_log(db, user_id=None, action="PRODUCT_UPDATE", resource="products",
              resource_id=product.id, ip=client_ip(request), meta={"fields": sorted(changes)})
    return product


# =========================
# DELETE
# =========================
@router.delete("/{product_id}")
def delete_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    product = _get_or_404(db, product_id)

    # Movements are immutable history; a product that has any stays in the catalogue
    has_history = db.query(Movement.id).filter(Movement.product_id == product_id).first()
    if has_history:
        raise ConflictError("Produto possui movimentações e não pode ser excluído")

    pid, pname = product.id, product.name
    db.delete(product)
    db.commit()

    write_log(db, user_id=None, action="PRODUCT_DELETE", resource="products",
              resource_id=pid, ip=client_ip(request), meta={"name": pname})
    return {"message": "Produto excluído"}
