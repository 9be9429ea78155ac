"""Shared fixtures: the reference deployment with one user vault (100 WETH, 80K mUSD)"""
import pytest
from stability_pool_model.src.constants import WAD
from stability_pool_model.src.deployment import deploy_reference

USER = "user"
USER2 = "user2"
USER3 = "user3"
CALLER = "caller"

HUNDRED_ETHER = 100 * WAD
EIGHTY_THOUSAND_ETHER = 80_000 * WAD
HUNDRED_THOUSAND_ETHER = 100_000 * WAD
USER_VAULT_ID = 1

@pytest.fixture
def deployment():
    deployment = deploy_reference()
    deployment.open_vault(USER, HUNDRED_ETHER, EIGHTY_THOUSAND_ETHER)
    return deployment

@pytest.fixture
def pool(deployment):
    return deployment.pool

@pytest.fixture
def ledger(deployment):
    return deployment.ledger
