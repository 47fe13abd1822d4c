from minirdb.catalog import Catalog, CatalogColumn, TableDef
from minirdb.tuple import Column, DataType, Schema


def test_default_users_table():
    table = Catalog().get_table("users")
    assert table.name == "users"
    assert [c.name for c in table.columns] == ["id", "name"]
    assert [c.data_type for c in table.columns] == [DataType.INT, DataType.VARCHAR]


def test_nullability():
    table = Catalog().get_table("users")
    assert table.get_column("id").nullable is False
    assert table.get_column("name").nullable is True


def test_missing_table():
    catalog = Catalog()
    assert catalog.get_table("unknown_table") is None
    assert catalog.get_table_id("unknown_table") is None


def test_table_ids():
    catalog = Catalog()
    assert catalog.get_table_id("users") == 0
    assert catalog.get_table_by_id(0).name == "users"
    assert catalog.get_table_by_id(1) is None
    assert catalog.get_table_by_id(-1) is None


def test_column_lookup():
    table = Catalog().get_table("users")
    assert table.get_column_id("id") == 0
    assert table.get_column_id("name") == 1
    assert table.get_column_id("age") is None
    assert table.get_column("age") is None


def test_to_schema():
    schema = Catalog().get_table("users").to_schema()
    assert schema == Schema([Column("id", DataType.INT), Column("name", DataType.VARCHAR)])


def test_custom_tables():
    items = TableDef("items", [CatalogColumn("ok", DataType.BOOL, nullable=False)])
    catalog = Catalog([items])
    assert catalog.get_table("users") is None
    assert catalog.get_table_id("items") == 0
    assert catalog.get_table_by_id(0) is items