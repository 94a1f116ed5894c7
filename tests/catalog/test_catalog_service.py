"""Tests for the catalog service.

Covers the product/variant consistency rules:
- variants are linked to an existing product on both sides
- SKUs are unique across the catalog
- products with variants cannot be deleted
- deleting a variant detaches it from its product
"""

import pytest
from sqlalchemy import delete, select

from catalog_api.catalog.models import Product, ProductVariant
from catalog_api.catalog.service import CatalogService
from catalog_api.domain.exceptions import (
    DuplicateSkuError,
    InvalidInputError,
    ProductHasVariantsError,
    ProductNotFoundError,
    VariantNotFoundError,
)
from catalog_api.infrastructure.database import Database


async def _reload(database: Database, product_id: str) -> Product:
    """Load a product through a fresh session."""
    async with database.session_factory() as session:
        return await CatalogService(session).get_product(product_id)


@pytest.fixture
async def shoe(service: CatalogService) -> Product:
    """A product without variants."""
    return await service.add_product(
        name="Shoe",
        description="Running shoe",
        price=49.99,
    )


# ============================================================================
# Products
# ============================================================================


class TestAddProduct:
    """Tests for CatalogService.add_product."""

    async def test_creates_product_with_id_and_no_variants(
        self, service: CatalogService
    ) -> None:
        """New products get an ID and an empty variant list."""
        product = await service.add_product(
            name="Test Product",
            description="Test description",
            price=19.99,
        )

        assert product.id
        assert product.name == "Test Product"
        assert product.description == "Test description"
        assert product.price == 19.99
        assert product.variants == []
        assert product.created_at is not None

    async def test_accepts_zero_price(self, service: CatalogService) -> None:
        """A free product is valid."""
        product = await service.add_product(name="Sticker", description="Free", price=0)
        assert product.price == 0

    @pytest.mark.parametrize(
        "name,description,price",
        [
            ("", "desc", 1.0),
            ("   ", "desc", 1.0),
            ("name", "", 1.0),
            ("name", None, 1.0),
            ("name", "desc", None),
            ("name", "desc", "abc"),
            ("name", "desc", float("nan")),
            ("name", "desc", -1),
        ],
    )
    async def test_rejects_invalid_fields(
        self, service: CatalogService, name, description, price
    ) -> None:
        """Missing or malformed fields are rejected."""
        with pytest.raises(InvalidInputError):
            await service.add_product(name=name, description=description, price=price)

        assert list(await service.list_products()) == []


class TestGetProduct:
    """Tests for CatalogService.get_product and list_products."""

    async def test_get_unknown_product(self, service: CatalogService) -> None:
        """Unknown IDs raise not found."""
        with pytest.raises(ProductNotFoundError):
            await service.get_product("does-not-exist")

    async def test_list_includes_variants(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """Listed products carry their resolved variants."""
        await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        other = await service.add_product(name="Sock", description="Wool", price=5)

        products = {p.id: p for p in await service.list_products()}

        assert set(products) == {shoe.id, other.id}
        assert [v.sku_id for v in products[shoe.id].variants] == ["SKU1"]
        assert products[other.id].variants == []


class TestUpdateProduct:
    """Tests for CatalogService.update_product."""

    async def test_updates_only_supplied_fields(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """Fields that are not supplied keep their values."""
        await service.update_product(shoe.id, name="Trail Shoe")

        reloaded = await _reload(database, shoe.id)
        assert reloaded.name == "Trail Shoe"
        assert reloaded.description == "Running shoe"
        assert reloaded.price == 49.99

    async def test_zero_price_is_applied(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """A price of 0 counts as supplied."""
        await service.update_product(shoe.id, price=0)

        reloaded = await _reload(database, shoe.id)
        assert reloaded.price == 0

    async def test_no_fields_rejected(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """An update without any field mutates nothing."""
        with pytest.raises(InvalidInputError):
            await service.update_product(shoe.id)

        reloaded = await _reload(database, shoe.id)
        assert reloaded.name == "Shoe"
        assert reloaded.price == 49.99

    async def test_non_numeric_price_rejected(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """Price must be a number when supplied."""
        with pytest.raises(InvalidInputError):
            await service.update_product(shoe.id, price="cheap")

    async def test_missing_id_rejected(self, service: CatalogService) -> None:
        """An ID is required."""
        with pytest.raises(InvalidInputError):
            await service.update_product(None, name="x")

    async def test_unknown_product(self, service: CatalogService) -> None:
        """Unknown IDs raise not found."""
        with pytest.raises(ProductNotFoundError):
            await service.update_product("does-not-exist", name="x")


class TestDeleteProduct:
    """Tests for CatalogService.delete_product."""

    async def test_deletes_product_without_variants(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """A product without variants is removed and returned."""
        deleted = await service.delete_product(shoe.id)

        assert deleted.id == shoe.id
        with pytest.raises(ProductNotFoundError):
            await _reload(database, shoe.id)

    async def test_blocked_while_variants_exist(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """Products with variants cannot be deleted and stay unchanged."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        with pytest.raises(ProductHasVariantsError):
            await service.delete_product(shoe.id)

        reloaded = await _reload(database, shoe.id)
        assert reloaded.variant_ids == [variant.id]

    async def test_missing_id_rejected(self, service: CatalogService) -> None:
        """A blank ID is invalid input."""
        with pytest.raises(InvalidInputError):
            await service.delete_product("  ")

    async def test_unknown_product(self, service: CatalogService) -> None:
        """Unknown IDs raise not found."""
        with pytest.raises(ProductNotFoundError):
            await service.delete_product("does-not-exist")


# ============================================================================
# Variants
# ============================================================================


class TestAddVariant:
    """Tests for CatalogService.add_variant."""

    async def test_links_variant_and_product(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """The product lists the variant once; the variant points back."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        assert variant.id
        assert variant.product_id == shoe.id
        assert variant.stock_count == 10
        assert variant.additional_cost == 5

        reloaded = await _reload(database, shoe.id)
        assert reloaded.variant_ids.count(variant.id) == 1
        assert reloaded.variants[0].product_id == shoe.id

    async def test_keeps_insertion_order(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """Variants are listed in the order they were added."""
        skus = ["SKU-C", "SKU-A", "SKU-B"]
        for sku in skus:
            await service.add_variant(
                product_id=shoe.id, name=sku, sku_id=sku, additional_cost=0, count=1
            )

        reloaded = await _reload(database, shoe.id)
        assert [v.sku_id for v in reloaded.variants] == skus

    async def test_duplicate_sku_rejected(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """A SKU in use anywhere in the catalog cannot be reused."""
        other = await service.add_product(name="Boot", description="Hiking boot", price=99)
        await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        with pytest.raises(DuplicateSkuError):
            await service.add_variant(
                product_id=other.id, name="Brown/9", sku_id="SKU1", additional_cost=0, count=1
            )

        assert len((await _reload(database, shoe.id)).variants) == 1
        assert (await _reload(database, other.id)).variants == []

    async def test_duplicate_sku_checked_before_product(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """SKU conflicts are reported even for an unknown product."""
        await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        with pytest.raises(DuplicateSkuError):
            await service.add_variant(
                product_id="does-not-exist", name="x", sku_id="SKU1", additional_cost=0, count=1
            )

    async def test_duplicate_sku_caught_by_constraint(
        self, service: CatalogService, shoe: Product, database: Database, monkeypatch
    ) -> None:
        """A concurrent insert that slips past the lookup is rolled back."""
        await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        async def not_seen(sku_id: str) -> None:
            return None

        monkeypatch.setattr(service.variants, "get_by_sku", not_seen)

        with pytest.raises(DuplicateSkuError):
            await service.add_variant(
                product_id=shoe.id, name="Blue/9", sku_id="SKU1", additional_cost=0, count=1
            )

        reloaded = await _reload(database, shoe.id)
        assert [v.name for v in reloaded.variants] == ["Red/9"]

    async def test_unknown_product(self, service: CatalogService) -> None:
        """Variants need an existing product."""
        with pytest.raises(ProductNotFoundError):
            await service.add_variant(
                product_id="does-not-exist", name="x", sku_id="SKU9", additional_cost=0, count=1
            )

    async def test_negative_additional_cost_allowed(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """A variant may be cheaper than its product."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Clearance", sku_id="SKU-CL", additional_cost=-10, count=0
        )
        assert variant.additional_cost == -10
        assert variant.stock_count == 0

    @pytest.mark.parametrize(
        "fields",
        [
            {"product_id": None},
            {"product_id": ""},
            {"name": ""},
            {"sku_id": None},
            {"additional_cost": "five"},
            {"additional_cost": None},
            {"count": None},
            {"count": -1},
            {"count": 1.5},
        ],
    )
    async def test_rejects_invalid_fields(
        self, service: CatalogService, shoe: Product, fields: dict
    ) -> None:
        """Missing or malformed fields are rejected."""
        kwargs = {
            "product_id": shoe.id,
            "name": "Red/9",
            "sku_id": "SKU1",
            "additional_cost": 5,
            "count": 10,
        }
        kwargs.update(fields)

        with pytest.raises(InvalidInputError):
            await service.add_variant(**kwargs)


class TestUpdateVariant:
    """Tests for CatalogService.update_variant."""

    async def test_updates_supplied_fields(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """Name, cost and count can be changed; zero values are applied."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        updated = await service.update_variant(variant.id, additional_cost=0, count=0)

        assert updated.name == "Red/9"
        assert updated.additional_cost == 0
        assert updated.stock_count == 0
        assert updated.product_id == shoe.id

        reloaded = await _reload(database, shoe.id)
        assert reloaded.variants[0].stock_count == 0

    async def test_no_fields_rejected(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """An update without any field is invalid."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )

        with pytest.raises(InvalidInputError):
            await service.update_variant(variant.id)

    async def test_unknown_variant(self, service: CatalogService) -> None:
        """Unknown IDs raise not found."""
        with pytest.raises(VariantNotFoundError):
            await service.update_variant("does-not-exist", name="x")


class TestDeleteVariant:
    """Tests for CatalogService.delete_variant."""

    async def test_detaches_from_product(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """The deleted variant disappears from its product's list."""
        first = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        second = await service.add_variant(
            product_id=shoe.id, name="Blue/9", sku_id="SKU2", additional_cost=5, count=3
        )

        deleted = await service.delete_variant(first.id)

        assert deleted.id == first.id
        assert deleted.sku_id == "SKU1"
        reloaded = await _reload(database, shoe.id)
        assert reloaded.variant_ids == [second.id]

    async def test_product_deletable_afterwards(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """Once its variants are gone the product can be deleted."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        await service.delete_variant(variant.id)

        deleted = await service.delete_product(shoe.id)
        assert deleted.id == shoe.id

    async def test_sku_reusable_after_delete(
        self, service: CatalogService, shoe: Product
    ) -> None:
        """A deleted variant's SKU can be used again."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        await service.delete_variant(variant.id)

        again = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        assert again.id != variant.id

    async def test_unknown_variant(self, service: CatalogService) -> None:
        """Unknown IDs raise not found."""
        with pytest.raises(VariantNotFoundError):
            await service.delete_variant("does-not-exist")

    async def test_missing_id_rejected(self, service: CatalogService) -> None:
        """An ID is required."""
        with pytest.raises(InvalidInputError):
            await service.delete_variant(None)

    async def test_owner_already_gone(
        self, service: CatalogService, shoe: Product, database: Database
    ) -> None:
        """A variant whose product row vanished is still deleted."""
        variant = await service.add_variant(
            product_id=shoe.id, name="Red/9", sku_id="SKU1", additional_cost=5, count=10
        )
        async with database.session_factory() as session:
            await session.execute(delete(Product).where(Product.id == shoe.id))
            await session.commit()

        async with database.session_factory() as session:
            deleted = await CatalogService(session).delete_variant(variant.id)

        assert deleted.id == variant.id
        async with database.session_factory() as session:
            remaining = await session.execute(
                select(ProductVariant).where(ProductVariant.id == variant.id)
            )
            assert remaining.scalar_one_or_none() is None
