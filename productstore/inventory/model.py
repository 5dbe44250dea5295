from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..common.db import Base
from ..common.errors import ValidationError


class Product(Base):
    __tablename__ = "products"

    # SQLite only autoincrements an INTEGER primary key
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    stock: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


def _optional_int(data: Mapping[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = data.get(key, default)
    if value is None:
        return default
    # bool is an int subclass but never a valid id or stock
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"The '{key}' must be an integer")
    return value


@dataclass
class ProductItem:
    """Product record exchanged with callers of the store.

    ``id`` is None until the store assigns one. ``stock`` defaults to 0.
    """

    name: Optional[str]
    stock: int = 0
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["ProductItem"]:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValidationError("The item must be an object")
        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValidationError("The 'name' must be a string")
        return cls(
            name=name,
            stock=_optional_int(data, "stock", 0),
            id=_optional_int(data, "id"),
        )

    @classmethod
    def from_row(cls, row: Product) -> "ProductItem":
        return cls(id=int(row.id), name=row.name, stock=int(row.stock))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
