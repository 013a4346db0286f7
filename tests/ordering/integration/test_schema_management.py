"""Integration tests for shared schema management against the configured providers."""

from ordering.domain import ordering
from ordering.projections.account_access import AccountAccess
from protean import current_domain
from shared.db import drop_db, setup_db


class TestSchemaManagement:
    def test_memory_provider_needs_no_schema(self):
        setup_db(ordering)
        drop_db(ordering)

    def test_setup_leaves_existing_data_alone(self, seed_account):
        account_id = seed_account("buyer")
        setup_db(ordering)
        assert current_domain.repository_for(AccountAccess).get(account_id).role == "buyer"
