"""Integration tests for product and category use cases."""

import pytest

from marketplace.application.add_product import AddProductHandler
from marketplace.application.delete_product import DeleteProductHandler
from marketplace.application.list_categories import ListCategoriesHandler
from marketplace.application.list_products import ListProductsHandler
from marketplace.application.manage_categories import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    UpdateCategoryHandler,
)
from marketplace.application.update_product import (
    ProductChanges,
    SetOfferHandler,
    SetStockHandler,
    UpdateProductHandler,
)
from marketplace.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from marketplace.domain.model.category import Category
from marketplace.domain.model.product import Product
from marketplace.domain.model.user import Role
from marketplace.domain.model.value_objects import Money
from tests.fakes import FakeCategoryRepository, FakeProductRepository, make_user

VENDOR_A = make_user("va", Role.VENDOR)
VENDOR_B = make_user("vb", Role.VENDOR)
ADMIN = make_user("admin", Role.ADMIN)
CUSTOMER = make_user("c1")


def _setup():
    categories = FakeCategoryRepository([
        Category(id="home", name="Home"),
        Category(id="lighting", name="Lighting", parent_id="home"),
        Category(id="garden", name="Garden"),
    ])
    products = FakeProductRepository([
        Product(id="lamp", name="Lamp", price=Money.of("40.00"), vendor_id="va", stock=3, category_id="lighting"),
        Product(id="bulb", name="Bulb", price=Money.of("2.50"), vendor_id="va", stock=100, category_id="lighting"),
        Product(id="sofa", name="Sofa", price=Money.of("400.00"), vendor_id="vb", stock=1, category_id="home"),
    ])
    return products, categories


class TestProductOwnership:

    def test_vendor_adds_own_product(self):
        products, categories = _setup()
        dto = AddProductHandler(products, categories).handle(
            VENDOR_A, "Shade", "12.00", offer=10, stock=4, category_id="lighting"
        )
        assert dto.vendor_id == "va"
        assert dto.sale_price == "10.80"
        assert dto.weight_kg == "0.5"

    def test_customer_cannot_add(self):
        products, categories = _setup()
        with pytest.raises(PermissionDeniedError):
            AddProductHandler(products, categories).handle(CUSTOMER, "X", "1.00")

    def test_unknown_category_rejected(self):
        products, categories = _setup()
        with pytest.raises(EntityNotFoundError, match="Category not found"):
            AddProductHandler(products, categories).handle(VENDOR_A, "X", "1.00", category_id="nope")

    def test_other_vendor_cannot_update(self):
        products, categories = _setup()
        with pytest.raises(PermissionDeniedError, match="not owned by you"):
            UpdateProductHandler(products, categories).handle(
                VENDOR_B, "lamp", ProductChanges(price="1.00")
            )

    def test_owner_and_admin_update(self):
        products, categories = _setup()
        handler = UpdateProductHandler(products, categories)
        assert handler.handle(VENDOR_A, "lamp", ProductChanges(price="35.00")).price == "35.00"
        assert handler.handle(ADMIN, "lamp", ProductChanges(name="Big Lamp")).name == "Big Lamp"

    def test_failed_update_saves_nothing(self):
        products, categories = _setup()
        with pytest.raises(ValidationError):
            UpdateProductHandler(products, categories).handle(
                VENDOR_A, "lamp", ProductChanges(name="Renamed", stock=-1)
            )
        assert products.get_by_id("lamp").name == "Lamp"

    def test_set_stock_and_offer(self):
        products, _ = _setup()
        assert SetStockHandler(products).handle(VENDOR_A, "lamp", 0).stock == 0
        assert SetOfferHandler(products).handle(ADMIN, "lamp", 50).sale_price == "20.00"
        with pytest.raises(ValidationError, match="between 0 and 100"):
            SetOfferHandler(products).handle(VENDOR_A, "lamp", 101)

    def test_delete(self):
        products, _ = _setup()
        with pytest.raises(PermissionDeniedError):
            DeleteProductHandler(products).handle(VENDOR_B, "lamp")
        DeleteProductHandler(products).handle(VENDOR_A, "lamp")
        assert products.get_by_id("lamp") is None


class TestProductQueries:

    def test_search_and_price_filters(self):
        products, _ = _setup()
        handler = ListProductsHandler(products)
        assert [p.id for p in handler.handle(search="LAMP")] == ["lamp"]
        assert {p.id for p in handler.handle(min_price="3", max_price="100")} == {"lamp"}

    def test_sort(self):
        products, _ = _setup()
        names = [p.name for p in ListProductsHandler(products).handle(sort="price_desc")]
        assert names == ["Sofa", "Lamp", "Bulb"]
        with pytest.raises(ValidationError, match="Unknown sort"):
            ListProductsHandler(products).handle(sort="random")

    def test_vendor_views(self):
        products, _ = _setup()
        handler = ListProductsHandler(products)
        assert {p.id for p in handler.mine(VENDOR_A)} == {"lamp", "bulb"}
        assert [p.id for p in handler.low_stock(VENDOR_A)] == ["lamp"]
        with pytest.raises(PermissionDeniedError):
            handler.mine(CUSTOMER)

    def test_admin_listing(self):
        products, _ = _setup()
        assert len(ListProductsHandler(products).for_admin(ADMIN, vendor_id="vb")) == 1
        with pytest.raises(PermissionDeniedError):
            ListProductsHandler(products).for_admin(VENDOR_A)


class TestCategories:

    def test_create_is_admin_only(self):
        _, categories = _setup()
        with pytest.raises(PermissionDeniedError):
            CreateCategoryHandler(categories).handle(VENDOR_A, "Toys")
        assert CreateCategoryHandler(categories).handle(ADMIN, "Toys").name == "Toys"

    def test_duplicate_name_case_insensitive(self):
        _, categories = _setup()
        with pytest.raises(ConflictError, match="already exists"):
            CreateCategoryHandler(categories).handle(ADMIN, "garden")

    def test_reparent_into_descendant_rejected(self):
        _, categories = _setup()
        with pytest.raises(ValidationError, match="cycle"):
            UpdateCategoryHandler(categories).handle(ADMIN, "home", parent_id="lighting")

    def test_clear_parent(self):
        _, categories = _setup()
        dto = UpdateCategoryHandler(categories).handle(ADMIN, "lighting", clear_parent=True)
        assert dto.parent_id is None

    def test_delete_rules(self):
        products, categories = _setup()
        handler = DeleteCategoryHandler(categories, products)
        with pytest.raises(ConflictError, match="with products"):
            handler.handle(ADMIN, "lighting")
        products.delete("sofa")
        with pytest.raises(ConflictError, match="subcategories"):
            handler.handle(ADMIN, "home")
        handler.handle(ADMIN, "garden")
        assert categories.get_by_id("garden") is None

    def test_listing_and_tree(self):
        products, categories = _setup()
        handler = ListCategoriesHandler(categories, products)
        assert [c.name for c in handler.handle(parent="root")] == ["Garden", "Home"]
        assert handler.show("lighting").product_count == 2
        tree = handler.tree()
        assert tree[1].children[0].category.id == "lighting"

    def test_products_include_subcategories(self):
        products, categories = _setup()
        page = ListCategoriesHandler(categories, products).products("home", page=1, limit=2, sort="price_asc")
        assert page.total == 3
        assert page.total_pages == 2
        assert [p.name for p in page.products] == ["Bulb", "Lamp"]
