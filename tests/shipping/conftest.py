import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def shipping_bed():
    from shipping.domain import shipping

    bed = DomainFixture(shipping)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shipping_bed):
    from shipping.reference_data import seed_reference_data
    from shipping.routing import reset_routing

    with shipping_bed.domain_context():
        seed_reference_data()
        reset_routing()
        yield
        reset_routing()
