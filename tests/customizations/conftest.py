import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def customizations_bed():
    from customizations.domain import customizations

    bed = DomainFixture(customizations)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(customizations_bed):
    with customizations_bed.domain_context():
        yield
