"""
Tests for product CRUD, filtering and search.
"""

from decimal import Decimal

import pytest

from inventory_api.core.errors import NotFoundError
from inventory_api.schemas.product import ProductCreate, ProductUpdate
from inventory_api.services.product_service import ProductService


def _payload(category_id: int, **overrides) -> dict:
    data = {
        "name": "Cordless drill",
        "description": "18V, two batteries",
        "price": Decimal("129.99"),
        "stock": 7,
        "category_id": category_id,
        "image_url": "https://img.example.com/drill.png",
        "image_base64": None,
    }
    data.update(overrides)
    return data


class TestCreate:
    async def test_missing_category_is_not_found(self, uow):
        with pytest.raises(NotFoundError, match="Category"):
            await ProductService(uow).create(ProductCreate(**_payload(category_id=999)))

    async def test_category_vanishing_before_commit_is_not_found(self, uow, monkeypatch):
        async def _stale_check(category_id):
            return True

        monkeypatch.setattr(uow.categories, "id_exists", _stale_check)

        with pytest.raises(NotFoundError, match="Category"):
            await ProductService(uow).create(ProductCreate(**_payload(category_id=999)))

    async def test_created_product_carries_its_category(self, uow, make_category):
        tools = await make_category("Tools", description="Hand and power tools")

        product = await ProductService(uow).create(ProductCreate(**_payload(tools.category_id)))

        assert product.product_id is not None
        assert product.is_active is True
        assert product.category.category_id == tools.category_id
        assert product.category.name == "Tools"
        assert product.category.description == "Hand and power tools"

    async def test_create_then_read_round_trip(self, uow, make_category):
        tools = await make_category("Tools")
        payload = _payload(tools.category_id, image_base64="aGVsbG8=")
        service = ProductService(uow)

        created = await service.create(ProductCreate(**payload))
        fetched = await service.get_by_id(created.product_id)

        for field, value in payload.items():
            assert getattr(fetched, field) == value
        assert fetched.is_active is True
        assert fetched.created_at is not None
        assert fetched.updated_at is None


class TestUpdate:
    async def test_update_overwrites_every_field_and_moves_category(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        garden = await make_category("Garden")
        product = await make_product(tools, "Shovel", price="20.00")
        service = ProductService(uow)

        updated = await service.update(
            product.product_id,
            ProductUpdate(**_payload(
                garden.category_id,
                name="Spade",
                description=None,
                price=Decimal("24.50"),
                stock=0,
                image_url=None,
                is_active=False,
            )),
        )

        assert updated.name == "Spade"
        assert updated.description is None
        assert updated.price == Decimal("24.50")
        assert updated.stock == 0
        assert updated.is_active is False
        assert updated.category_id == garden.category_id
        assert updated.category.name == "Garden"
        assert updated.updated_at is not None

    async def test_update_missing_product(self, uow, make_category):
        tools = await make_category("Tools")

        with pytest.raises(NotFoundError, match="Product"):
            await ProductService(uow).update(999, ProductUpdate(**_payload(tools.category_id)))

    async def test_update_to_missing_category(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        product = await make_product(tools, "Shovel")

        with pytest.raises(NotFoundError, match="Category"):
            await ProductService(uow).update(product.product_id, ProductUpdate(**_payload(999)))

    async def test_category_vanishing_before_commit_is_not_found(self, uow, make_category, make_product, monkeypatch):
        tools = await make_category("Tools")
        product = await make_product(tools, "Shovel")

        async def _stale_check(category_id):
            return True

        monkeypatch.setattr(uow.categories, "id_exists", _stale_check)

        with pytest.raises(NotFoundError, match="Category"):
            await ProductService(uow).update(product.product_id, ProductUpdate(**_payload(999)))


class TestDelete:
    async def test_delete_is_hard(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        product = await make_product(tools, "Shovel")
        service = ProductService(uow)

        assert await service.delete(product.product_id) is True
        assert await service.get_by_id(product.product_id) is None
        assert await service.delete(product.product_id) is False


class TestListing:
    async def test_list_all_only_active_in_id_order(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        b = await make_product(tools, "B")
        await make_product(tools, "hidden", is_active=False)
        c = await make_product(tools, "C")

        products = await ProductService(uow).list_all()

        assert [p.product_id for p in products] == [b.product_id, c.product_id]
        assert all(p.category.name == "Tools" for p in products)

    async def test_filters_compose(self, uow, make_category, make_product):
        first = await make_category("First")
        second = await make_category("Second")
        await make_product(second, "too cheap", price="9.99")
        in_range_low = await make_product(second, "low edge", price="10.00")
        await make_product(second, "inactive", price="20.00", is_active=False)
        await make_product(first, "wrong category", price="20.00")
        in_range_high = await make_product(second, "high edge", price="50.00")
        await make_product(second, "too dear", price="50.01")

        products = await ProductService(uow).list_filtered(
            category_id=second.category_id,
            min_price=Decimal("10"),
            max_price=Decimal("50"),
            page=1,
            limit=10,
        )

        assert [p.product_id for p in products] == [in_range_low.product_id, in_range_high.product_id]
        for p in products:
            assert p.is_active
            assert p.category_id == second.category_id
            assert Decimal("10") <= p.price <= Decimal("50")

    async def test_each_filter_is_optional(self, uow, make_category, make_product):
        first = await make_category("First")
        second = await make_category("Second")
        a = await make_product(first, "a", price="5.00")
        b = await make_product(second, "b", price="15.00")

        service = ProductService(uow)

        assert [p.product_id for p in await service.list_filtered()] == [a.product_id, b.product_id]
        assert [p.product_id for p in await service.list_filtered(min_price=Decimal("10"))] == [b.product_id]
        assert [p.product_id for p in await service.list_filtered(max_price=Decimal("10"))] == [a.product_id]
        assert [p.product_id for p in await service.list_filtered(category_id=first.category_id)] == [a.product_id]

    async def test_pagination(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        ids = [(await make_product(tools, f"p{i}")).product_id for i in range(5)]
        service = ProductService(uow)

        page_two = await service.list_filtered(page=2, limit=2)
        last_page = await service.list_filtered(page=3, limit=2)
        clamped = await service.list_filtered(page=0, limit=0)

        assert [p.product_id for p in page_two] == ids[2:4]
        assert [p.product_id for p in last_page] == ids[4:]
        assert [p.product_id for p in clamped] == ids[:1]


class TestSearch:
    async def test_matches_description_only_hit(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        await make_product(tools, "Hammer", description="Steel head")
        drill = await make_product(tools, "Drill", description="Ships with a cordless battery")

        results = await ProductService(uow).search("cordless")

        assert [p.product_id for p in results] == [drill.product_id]

    async def test_matches_name_and_skips_inactive(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        saw = await make_product(tools, "Hand saw")
        await make_product(tools, "Old saw", is_active=False)
        jigsaw = await make_product(tools, "Jigsaw", description=None)

        results = await ProductService(uow).search("saw")

        assert [p.product_id for p in results] == [saw.product_id, jigsaw.product_id]

    async def test_wildcards_are_literal(self, uow, make_category, make_product):
        tools = await make_category("Tools")
        await make_product(tools, "Plain")
        discounted = await make_product(tools, "50% off bundle")

        results = await ProductService(uow).search("%")

        assert [p.product_id for p in results] == [discounted.product_id]
