import json
from uuid import uuid4

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


@pytest.fixture(autouse=True)
def _partner_directory():
    from ordering.partners import reset_partner_directory

    reset_partner_directory()
    yield
    reset_partner_directory()


ORDER_ITEMS = [
    {"product_id": "prod-001", "variant_id": "var-001", "title": "Steel Bottle", "quantity": 2, "unit_price": 12.5},
    {"product_id": "prod-002", "title": "Cotton Tote", "quantity": 1, "unit_price": 8.0},
]

PICKUP = {"address": "14 Market Road, Pune", "contact_name": "Asha", "contact_phone": "+91 98765 43210"}
DROP = {"address": "7 Lake View, Pune", "contact_name": "Meera", "latitude": 18.52, "longitude": 73.85}


@pytest.fixture()
def seed_account():
    """Add an account to the AccountAccess read model and return its id."""
    from ordering.projections.account_access import AccountAccess

    def _seed(role, approval_status="approved", account_id=None):
        account_id = account_id or str(uuid4())
        current_domain.repository_for(AccountAccess).add(
            AccountAccess(account_id=account_id, name=f"{role} account", role=role, approval_status=approval_status)
        )
        return account_id

    return _seed


@pytest.fixture()
def buyer_id(seed_account):
    return seed_account("buyer")


@pytest.fixture()
def seller_id(seed_account):
    return seed_account("seller")


@pytest.fixture()
def admin_id(seed_account):
    return seed_account("admin")


@pytest.fixture()
def partner_id(seed_account):
    return seed_account("delivery_partner")


@pytest.fixture()
def place_order(buyer_id, seller_id):
    from ordering.order.placement import PlaceOrder

    def _place():
        return current_domain.process(
            PlaceOrder(
                customer_id=buyer_id,
                seller_id=seller_id,
                items=json.dumps(ORDER_ITEMS),
                shipping_charges=3.0,
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def confirmed_order_id(place_order, seller_id):
    from ordering.order.acceptance import AcceptOrder

    order_id = place_order()
    current_domain.process(AcceptOrder(order_id=order_id, actor_id=seller_id), asynchronous=False)
    return order_id


@pytest.fixture()
def create_delivery(seller_id):
    from ordering.delivery.creation import CreateDelivery

    def _create(order_id, actor_id=None):
        return current_domain.process(
            CreateDelivery(
                order_id=order_id,
                actor_id=actor_id or seller_id,
                pickup=json.dumps(PICKUP),
                drop=json.dumps(DROP),
                delivery_fee=4.5,
            ),
            asynchronous=False,
        )

    return _create
