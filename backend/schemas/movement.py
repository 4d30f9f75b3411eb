# backend/schemas/movement.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from schemas.product import ProductOut

# Request body for recording a stock movement. Fields are optional at the
# schema level; the route reports every missing one in a single 400.
class MovementCreate(BaseModel):
    product_id: Optional[int] = Field(None, validation_alias=AliasChoices("product_id", "produto_id"))
    user_id: Optional[int] = Field(None, validation_alias=AliasChoices("user_id", "usuario_id"))
    kind: Optional[str] = Field(None, validation_alias=AliasChoices("kind", "tipo"))
    quantity: Optional[int] = Field(None, validation_alias=AliasChoices("quantity", "quantidade"))
    timestamp: Optional[datetime] = Field(None, validation_alias=AliasChoices("timestamp", "data_movimentacao"))
    note: Optional[str] = Field(None, validation_alias=AliasChoices("note", "observacao"))


class MovementOut(BaseModel):
    id: int
    product_id: int
    user_id: int
    kind: str
    quantity: int
    timestamp: datetime
    note: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# History row joined with the product and the responsible user
class MovementListItem(MovementOut):
    product_name: str
    user_name: str


# Result of a movement: the record plus the product as it is after the change
class MovementResult(BaseModel):
    movement: MovementOut
    product: ProductOut
