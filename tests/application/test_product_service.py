"""Integration tests for the Product use cases.

Uses in-memory fake repositories — no database.
"""

import asyncio

import pytest

from catalog.application.dto import AddProductRequest, UpdateProductRequest
from catalog.application.mapping import ProductMapper
from catalog.application.product_service import ProductService
from catalog.application.validation import ProductValidator
from catalog.domain.exceptions import (
    InvalidReference,
    StorageFailure,
    ValidationFailed,
)
from catalog.domain.model.predicate import by_id, category_is, name_contains
from catalog.domain.model.product import Category, Product
from tests.fakes import (
    FailingProductRepository,
    FakeProductRepository,
    RejectingProductRepository,
    VanishingProductRepository,
)


def _setup(
    products: list[Product] | None = None,
    repo_class: type[FakeProductRepository] = FakeProductRepository,
) -> tuple[ProductService, FakeProductRepository]:
    """Build the service over a fake repo, optionally pre-loaded."""
    if products is None:
        products = [
            Product("1", "Electric Kettle", Category.ACCESSORIES, 19.99, 4),
            Product("2", "Lamp", Category.ELECTRONICS, 12.0, 10),
            Product("3", "Sofa", Category.FURNITURE, 499.0, 1),
        ]
    repo = repo_class(products)
    service = ProductService(repo, ProductValidator(), ProductMapper())
    return service, repo


def _ids(responses) -> list[str]:
    return sorted(r.id for r in responses)


class TestQueries:

    def test_list_all(self):
        service, _ = _setup()
        assert _ids(asyncio.run(service.list_all())) == ["1", "2", "3"]

    def test_list_by_condition(self):
        service, _ = _setup()
        found = asyncio.run(service.list_by_condition(category_is(Category.FURNITURE)))
        assert _ids(found) == ["3"]

    def test_list_by_condition_matching_nothing_is_empty(self):
        service, _ = _setup()
        assert asyncio.run(service.list_by_condition(name_contains("piano"))) == []

    def test_get_one_by_condition(self):
        service, _ = _setup()
        found = asyncio.run(service.get_one_by_condition(by_id("2")))
        assert found.name == "Lamp"
        assert found.category is Category.ELECTRONICS

    def test_get_one_missing_is_none(self):
        service, _ = _setup()
        assert asyncio.run(service.get_by_id("missing")) is None

    def test_queries_never_write(self):
        service, repo = _setup()
        asyncio.run(service.list_all())
        asyncio.run(service.search("a"))
        asyncio.run(service.get_by_id("1"))
        assert repo.writes == []


class TestSearch:

    def test_union_of_name_and_category_matches(self):
        service, _ = _setup()
        found = asyncio.run(service.search("elec"))
        assert _ids(found) == ["1", "2"]

    def test_product_matching_both_fields_listed_once(self):
        service, _ = _setup(
            [Product("9", "Electronics Kit", Category.ELECTRONICS, 5.0, 1)]
        )
        found = asyncio.run(service.search("ELECTRONICS"))
        assert _ids(found) == ["9"]

    def test_no_match(self):
        service, _ = _setup()
        assert asyncio.run(service.search("zzz")) == []


class TestAdd:

    def test_returns_stored_product_with_new_id(self):
        service, _ = _setup()
        before = {r.id for r in asyncio.run(service.list_all())}

        added = asyncio.run(
            service.add(AddProductRequest("Fan", "HomeAppliances", 25.5, 10))
        )

        assert added.id
        assert added.id not in before
        assert added.name == "Fan"
        assert added.category is Category.HOME_APPLIANCES
        assert added.unit_price == 25.5
        assert added.quantity_in_stock == 10

    def test_fetch_after_add_equals_added(self):
        service, _ = _setup([])
        added = asyncio.run(service.add(AddProductRequest("Desk", "Furniture")))
        assert asyncio.run(service.get_by_id(added.id)) == added

    def test_missing_request_rejected(self):
        service, repo = _setup()
        with pytest.raises(ValueError, match="required"):
            asyncio.run(service.add(None))
        assert repo.calls == []

    @pytest.mark.parametrize(
        "request_, field",
        [
            (AddProductRequest("", "Electronics"), "name"),
            (AddProductRequest("Fan", "Toys"), "category"),
            (AddProductRequest("Fan", "Electronics", unit_price=-1.0), "unit_price"),
            (AddProductRequest("Fan", "Electronics", unit_price=10**400), "unit_price"),
            (AddProductRequest("Fan", "Electronics", quantity_in_stock=-1), "quantity_in_stock"),
        ],
    )
    def test_invalid_request_never_reaches_storage(self, request_, field):
        service, repo = _setup()
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(service.add(request_))
        assert list(exc_info.value.as_dict()) == [field]
        assert repo.calls == []

    def test_all_violations_aggregated(self):
        service, _ = _setup()
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(service.add(AddProductRequest(" ", "Toys", -3.0, -3)))
        assert list(exc_info.value.as_dict()) == [
            "name",
            "category",
            "unit_price",
            "quantity_in_stock",
        ]

    def test_storage_declining_yields_none(self):
        service, _ = _setup(repo_class=RejectingProductRepository)
        assert asyncio.run(service.add(AddProductRequest("Fan", "Electronics"))) is None

    def test_storage_failure_reaches_caller(self):
        service, repo = _setup(repo_class=FailingProductRepository)
        with pytest.raises(StorageFailure, match="database is locked"):
            asyncio.run(service.add(AddProductRequest("Fan", "Electronics")))
        assert repo.calls == ["add"]


class TestUpdate:

    def test_overwrites_fields_keeps_id(self):
        service, _ = _setup()
        updated = asyncio.run(
            service.update(UpdateProductRequest("2", "Desk Lamp", "Electronics", 15.0, 7))
        )
        assert updated.id == "2"
        assert updated.name == "Desk Lamp"
        assert updated.unit_price == 15.0
        assert asyncio.run(service.get_by_id("2")) == updated

    def test_unknown_id_is_invalid_reference(self):
        service, repo = _setup()
        before = asyncio.run(service.list_all())

        with pytest.raises(InvalidReference, match="does not exist"):
            asyncio.run(service.update(UpdateProductRequest("nope", "Fan", "Electronics")))

        assert asyncio.run(service.list_all()) == before
        assert repo.writes == []

    def test_unknown_id_checked_before_validation(self):
        service, _ = _setup()
        with pytest.raises(InvalidReference):
            asyncio.run(service.update(UpdateProductRequest("nope", "", "Toys")))

    @pytest.mark.parametrize(
        "request_, field",
        [
            (UpdateProductRequest("1", "", "Electronics"), "name"),
            (UpdateProductRequest("1", "Fan", "Toys"), "category"),
            (UpdateProductRequest("1", "Fan", "Electronics", unit_price=-1.0), "unit_price"),
            (UpdateProductRequest("1", "Fan", "Electronics", quantity_in_stock=-5), "quantity_in_stock"),
        ],
    )
    def test_invalid_request_never_writes(self, request_, field):
        service, repo = _setup()
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(service.update(request_))
        assert list(exc_info.value.as_dict()) == [field]
        assert repo.writes == []

    def test_missing_request_rejected(self):
        service, _ = _setup()
        with pytest.raises(ValueError, match="required"):
            asyncio.run(service.update(None))

    def test_product_deleted_between_check_and_write(self):
        service, _ = _setup(repo_class=VanishingProductRepository)
        with pytest.raises(InvalidReference):
            asyncio.run(service.update(UpdateProductRequest("1", "Kettle", "Accessories")))
        assert asyncio.run(service.get_by_id("1")) is None


class TestDelete:

    def test_existing_product_removed(self):
        service, _ = _setup()
        assert asyncio.run(service.delete("3")) is True
        assert _ids(asyncio.run(service.list_all())) == ["1", "2"]

    def test_unknown_id_returns_false_without_writing(self):
        service, repo = _setup()
        assert asyncio.run(service.delete("nope")) is False
        assert repo.writes == []
        assert _ids(asyncio.run(service.list_all())) == ["1", "2", "3"]


class TestProductLifecycle:

    def test_add_update_delete(self):
        service, _ = _setup([])

        added = asyncio.run(
            service.add(AddProductRequest("Fan", Category.HOME_APPLIANCES, 25.5, 10))
        )
        updated = asyncio.run(
            service.update(
                UpdateProductRequest(added.id, "Fan", Category.HOME_APPLIANCES, 30.0, 8)
            )
        )
        assert updated.id == added.id
        assert updated.unit_price == 30.0
        assert updated.quantity_in_stock == 8

        assert asyncio.run(service.delete(added.id)) is True
        assert asyncio.run(service.get_by_id(added.id)) is None
