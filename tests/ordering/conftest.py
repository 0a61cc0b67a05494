import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def gateway():
    """A fresh FakeGateway for every test."""
    from ordering.gateway import reset_gateway, set_gateway
    from ordering.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def register_product():
    """Register a catalogue product through the RegisterProduct command."""
    from ordering.catalogue.registration import RegisterProduct

    def _register(product_id, name="Widget", price=10.0, stock=10, category_id=None):
        return current_domain.process(
            RegisterProduct(
                product_id=product_id,
                name=name,
                price=price,
                stock=stock,
                category_id=category_id,
            ),
            asynchronous=False,
        )

    return _register
