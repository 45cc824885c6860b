"""Tests for the product repository and its variant collection operations."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from storeapi.errors import NotFound, StoreError, ValidationError
from storeapi.services.product_service import ProductRepository

MISSING_ID = "65a1f0c2b3d4e5f6a7b8c9d0"


@pytest.fixture
def repo(db):
    return ProductRepository(db.session)


def test_create_then_get_returns_same_fields(repo, shoe):
    created = repo.create(shoe)
    fetched = repo.get_by_id(created.id)

    assert fetched.name == "Shoe"
    assert fetched.price == 50
    assert fetched.category == "Footwear"
    assert len(fetched.variants) == 1
    assert fetched.variants[0].stock == 5
    assert fetched.created_at is not None


def test_get_by_id_accepts_uppercase_hex(repo, shoe):
    created = repo.create(shoe)
    assert repo.get_by_id(created.id.upper()).id == created.id


def test_get_missing_product(repo):
    with pytest.raises(NotFound):
        repo.get_by_id(MISSING_ID)


def test_invalid_variant_writes_nothing(repo, db, shoe):
    shoe["variants"].append({"color": "x", "size": "L", "stock": 1})
    with pytest.raises(ValidationError):
        repo.create(shoe)
    assert repo.list_all() == []


def test_list_all_newest_first(repo):
    first = repo.create({"name": "First", "price": 1, "category": "Bags"})
    second = repo.create({"name": "Second", "price": 2, "category": "Bags"})

    assert [p.id for p in repo.list_all()] == [second.id, first.id]


def test_find_by_category_case_insensitive_substring(repo, shoe):
    repo.create(shoe)
    repo.create({"name": "Tote", "price": 10, "category": "Bags"})

    found = repo.find_by_category("FOOT")
    assert [p.category for p in found] == ["Footwear"]
    assert repo.find_by_category("electronics") == []


def test_find_by_category_is_literal(repo, shoe):
    repo.create(shoe)
    assert repo.find_by_category("%") == []
    assert repo.find_by_category("F_otwear") == []


def test_partial_update_leaves_other_fields(repo, shoe):
    product = repo.create(shoe)
    variant_id = product.variants[0].id

    updated = repo.update(product.id, {"price": 40})

    assert updated.price == 40
    assert updated.name == "Shoe"
    assert updated.category == "Footwear"
    assert [v.id for v in updated.variants] == [variant_id]


def test_update_replaces_variants_wholesale(repo, shoe):
    product = repo.create(shoe)
    old_id = product.variants[0].id

    updated = repo.update(
        product.id,
        {"variants": [
            {"color": "green", "size": "S", "stock": 1},
            {"color": "black", "size": "XL", "stock": 2},
        ]},
    )

    assert [v.color for v in updated.variants] == ["green", "black"]
    assert old_id not in {v.id for v in updated.variants}


def test_update_rejects_bad_field(repo, shoe):
    product = repo.create(shoe)
    with pytest.raises(ValidationError):
        repo.update(product.id, {"name": "ab"})
    assert repo.get_by_id(product.id).name == "Shoe"


def test_add_variant_appends_with_unique_id(repo, shoe):
    product = repo.create(shoe)
    seen = {product.variants[0].id}

    for i, color in enumerate(["blue", "green", "black"], start=2):
        product = repo.add_variant(product.id, {"color": color, "size": "M", "stock": 0})
        assert len(product.variants) == i
        assert product.variants[-1].color == color
        assert product.variants[-1].id not in seen
        seen.add(product.variants[-1].id)


def test_add_variant_to_missing_product(repo):
    with pytest.raises(NotFound):
        repo.add_variant(MISSING_ID, {"color": "red", "size": "M", "stock": 1})


def test_remove_variant_is_idempotent(repo, shoe):
    shoe["variants"].append({"color": "blue", "size": "L", "stock": 2})
    product = repo.create(shoe)
    red_id = product.variants[0].id

    product = repo.remove_variant(product.id, red_id)
    assert [v.color for v in product.variants] == ["blue"]

    product = repo.remove_variant(product.id, red_id)
    assert [v.color for v in product.variants] == ["blue"]


def test_remove_variant_keeps_order_for_later_adds(repo, shoe):
    shoe["variants"] += [
        {"color": "blue", "size": "L", "stock": 2},
        {"color": "green", "size": "S", "stock": 3},
    ]
    product = repo.create(shoe)
    repo.remove_variant(product.id, product.variants[1].id)
    product = repo.add_variant(product.id, {"color": "black", "size": "XL", "stock": 1})

    assert [v.color for v in product.variants] == ["red", "green", "black"]


def test_projection_never_includes_stock(repo, shoe):
    shoe["variants"].append({"color": "blue", "size": "L", "stock": 99})
    repo.create(shoe)
    repo.create({"name": "Tote", "price": 10, "category": "Bags"})

    rows = repo.list_variant_projection()

    assert len(rows) == 2
    for row in rows:
        assert set(row) == {"id", "name", "category", "variants"}
        for variant in row["variants"]:
            assert set(variant) == {"id", "color", "size"}
    assert [v["color"] for v in rows[1]["variants"]] == ["red", "blue"]


def test_delete_returns_snapshot(repo, shoe):
    product = repo.create(shoe)
    snapshot = repo.delete(product.id)

    assert snapshot["name"] == "Shoe"
    assert snapshot["variants"][0]["stock"] == 5
    with pytest.raises(NotFound):
        repo.get_by_id(product.id)


def test_store_failure_becomes_store_error(repo, db, shoe, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db.session, "commit", boom)

    with pytest.raises(StoreError) as exc:
        repo.create(shoe)
    assert exc.value.message == "Error creating product"


@pytest.mark.parametrize(
    "bad_id", ["abc", "65a1f0c2b3d4e5f6a7b8c9d", "65a1f0c2b3d4e5f6a7b8c9zz"]
)
@pytest.mark.parametrize(
    "call",
    [
        lambda r, i: r.get_by_id(i),
        lambda r, i: r.update(i, {"price": 1}),
        lambda r, i: r.delete(i),
        lambda r, i: r.add_variant(i, {"color": "red", "size": "M", "stock": 1}),
        lambda r, i: r.remove_variant(i, MISSING_ID),
        lambda r, i: r.remove_variant(MISSING_ID, i),
    ],
)
def test_malformed_ids_never_reach_the_store(bad_id, call):
    session = MagicMock()
    repo = ProductRepository(session)

    with pytest.raises(ValidationError):
        call(repo, bad_id)
    assert session.method_calls == []


def test_failed_lookup_becomes_store_error():
    session = MagicMock()
    session.get.side_effect = OperationalError("SELECT", {}, Exception("gone away"))
    repo = ProductRepository(session)

    with pytest.raises(StoreError) as exc:
        repo.get_by_id(MISSING_ID)
    assert exc.value.message == "Error fetching product"
    assert exc.value.to_dict()["error"]
    session.rollback.assert_called_once()


def test_failed_query_becomes_store_error():
    session = MagicMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
    repo = ProductRepository(session)

    with pytest.raises(StoreError) as exc:
        repo.list_all()
    assert exc.value.message == "Error fetching products"
    session.rollback.assert_called_once()


def test_add_variant_rejects_stock_beyond_column_range(repo, shoe):
    product = repo.create(shoe)
    with pytest.raises(ValidationError) as exc:
        repo.add_variant(product.id, {"color": "blue", "size": "L", "stock": 10**30})
    assert exc.value.message == "Stock cannot exceed 2147483647"
    assert len(repo.get_by_id(product.id).variants) == 1
