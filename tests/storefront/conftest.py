from uuid import uuid4

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from storefront.notification.channel import reset_channels

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

        reset_channels()


@pytest.fixture()
def email_channel():
    """The fake email adapter, emptied."""
    from storefront.notification.channel import get_channel

    channel = get_channel()
    channel.reset()
    return channel


@pytest.fixture()
def make_category():
    from storefront.category.management import CreateCategory

    def _make(name="Kitchen", description=None):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _make


@pytest.fixture()
def make_product():
    from storefront.product.management import CreateProduct

    def _make(name="Espresso Cup", price=10.0, quantity=5, category_id=None, description=None):
        return current_domain.process(
            CreateProduct(
                name=name,
                price=price,
                quantity=quantity,
                category_id=category_id,
                description=description,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_user():
    from storefront.user.registration import register_user

    def _make(name="Jane Doe", email=None, password="s3cret-pass", role="customer"):
        email = email or f"user-{uuid4().hex[:8]}@example.com"
        user_id, _ = register_user(name=name, email=email, password=password, role=role)
        return user_id

    return _make


@pytest.fixture()
def fill_cart():
    from storefront.cart.items import AddToCart

    def _fill(user_id, *lines):
        for product_id, quantity in lines:
            current_domain.process(
                AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
                asynchronous=False,
            )

    return _fill
