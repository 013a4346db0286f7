import json

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def onboarding_bed():
    from onboarding.domain import onboarding

    bed = DomainFixture(onboarding)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(onboarding_bed):
    with onboarding_bed.domain_context():
        yield


SELLER_PROFILE = {
    "business_name": "Asha Traders",
    "email": "asha@example.com",
    "phone": "+91 98765 43210",
    "business_address": "14 Market Road, Pune",
    "gst_number": "27ABCDE1234F1Z5",
    "pan_number": "ABCDE1234F",
}

PARTNER_PROFILE = {
    "full_name": "Ravi Kumar",
    "email": "ravi@example.com",
    "phone": "+91 91234 56789",
    "address": "12 MG Road, Bengaluru",
    "vehicle_type": "scooter",
    "vehicle_number": "KA01AB1234",
}


@pytest.fixture()
def seller_profile():
    return dict(SELLER_PROFILE)


@pytest.fixture()
def partner_profile():
    return dict(PARTNER_PROFILE)


@pytest.fixture()
def seller_profile_json():
    return json.dumps(SELLER_PROFILE)


@pytest.fixture()
def partner_profile_json():
    return json.dumps(PARTNER_PROFILE)
