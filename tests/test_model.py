import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from productstore.common.errors import ValidationError
from productstore.inventory.model import Product, ProductItem


def test_from_dict_defaults():
    item = ProductItem.from_dict({"name": "widget"})
    assert item == ProductItem(name="widget", stock=0, id=None)


def test_from_dict_keeps_all_fields():
    item = ProductItem.from_dict({"id": 3, "name": "widget", "stock": 7})
    assert item.to_dict() == {"id": 3, "name": "widget", "stock": 7}


def test_from_dict_none_is_absent_item():
    assert ProductItem.from_dict(None) is None


def test_from_dict_null_stock_defaults_to_zero():
    assert ProductItem.from_dict({"name": "widget", "stock": None}).stock == 0


@pytest.mark.parametrize(
    "data",
    [
        ["widget", 1],
        {"name": 12},
        {"name": "widget", "stock": "5"},
        {"name": "widget", "stock": True},
        {"name": "widget", "id": 1.5},
    ],
)
def test_from_dict_rejects_malformed_input(data):
    with pytest.raises(ValidationError):
        ProductItem.from_dict(data)


def test_from_row():
    row = Product(id=4, name="gadget", stock=2)
    assert ProductItem.from_row(row) == ProductItem(id=4, name="gadget", stock=2)


def test_products_table_uses_64_bit_columns():
    ddl = str(CreateTable(Product.__table__).compile(dialect=postgresql.dialect()))
    assert "id BIGSERIAL NOT NULL" in ddl
    assert "stock BIGINT NOT NULL" in ddl


def test_products_table_keeps_sqlite_rowid_primary_key():
    ddl = str(CreateTable(Product.__table__).compile(dialect=sqlite.dialect()))
    assert "id INTEGER NOT NULL" in ddl
    assert "PRIMARY KEY (id)" in ddl
