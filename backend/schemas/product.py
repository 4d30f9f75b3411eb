# backend/schemas/product.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Any, Optional


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def _to_int_or_zero(value: Any) -> int:
    # Absent or non-numeric quantities fall back to 0 on creation
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


# Schema for creating a new product
class ProductCreate(BaseModel):
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "nome"))
    quantity: int = Field(0, validation_alias=AliasChoices("quantity", "quantidade"))
    minimum_threshold: int = Field(
        0, validation_alias=AliasChoices("minimum_threshold", "min", "estoque_minimo")
    )

    @field_validator("quantity", "minimum_threshold", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        return _to_int_or_zero(value)


# Schema for partial product updates; omitted or null fields keep their value
class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "nome"))
    quantity: Optional[int] = Field(None, validation_alias=AliasChoices("quantity", "quantidade"))
    minimum_threshold: Optional[int] = Field(
        None, validation_alias=AliasChoices("minimum_threshold", "min", "estoque_minimo")
    )

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductOut(ORMBase):
    id: int
    name: str
    quantity: int
    minimum_threshold: int

    @computed_field
    @property
    def below_minimum(self) -> bool:
        return self.quantity < self.minimum_threshold
