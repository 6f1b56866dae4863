import pytest

from conftest import WALLET_A
from models import Account, BalanceTransaction
from utils.errors import ValidationError
from utils.membership_service import level_index


@pytest.mark.parametrize('body', [
    {'walletAddress': {'x': 1}, 'transactionHash': '0xabc'},
    {'walletAddress': WALLET_A, 'transactionHash': ['0xabc']},
    {'walletAddress': 42, 'transactionHash': '0xabc'},
])
def test_create_account_rejects_non_string_fields(client, body):
    response = client.post('/api/create-account', json=body)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing required fields'
    assert Account.query.count() == 0


@pytest.mark.parametrize('body', [
    {'walletAddress': [WALLET_A], 'invitationCode': 'GENESIS'},
    {'walletAddress': WALLET_A, 'invitationCode': {'code': 'GENESIS'}},
])
def test_create_default_user_rejects_non_string_fields(client, body):
    response = client.post('/api/create-default-user', json=body)
    assert response.status_code == 400
    assert Account.query.count() == 0


@pytest.mark.parametrize('body', [
    {'walletAddress': {'x': 1}, 'invitationCode': 'INVITE01'},
    {'walletAddress': WALLET_A, 'invitationCode': ['INVITE01']},
    {'walletAddress': WALLET_A, 'invitationCode': 12345678},
])
def test_activate_account_rejects_non_string_fields(client, make_account, body):
    make_account(WALLET_A)
    response = client.post('/api/activate-account', json=body)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing required fields'


@pytest.mark.parametrize('level', [['Legendary'], {'level': 'Legendary'}, 2])
def test_update_membership_rejects_non_string_level(client, make_account, relayer, level):
    make_account(WALLET_A, is_activated=True)
    response = client.post('/api/update-membership', json={'walletAddress': WALLET_A, 'membershipLevel': level})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing or invalid input fields'
    assert relayer.calls == []


@pytest.mark.parametrize('body', [
    {'walletAddress': [WALLET_A], 'amount': 5, 'type': 'credit'},
    {'walletAddress': WALLET_A, 'amount': 5, 'type': ['credit']},
])
def test_update_balance_rejects_non_string_fields(client, make_account, body):
    make_account(WALLET_A)
    response = client.post('/api/update-balance', json=body)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing required fields'
    assert BalanceTransaction.query.count() == 0


def test_update_balance_rejects_non_string_description(client, make_account):
    make_account(WALLET_A)
    response = client.post('/api/update-balance', json={
        'walletAddress': WALLET_A,
        'amount': 5,
        'type': 'credit',
        'description': {'note': 'x'}
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid description'


def test_level_index_rejects_unhashable_level():
    with pytest.raises(ValidationError):
        level_index(['Legendary'])
