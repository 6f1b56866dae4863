from datetime import datetime

import pytest

from conftest import WALLET_A, WALLET_B, reload_account
from models import BalanceTransaction
from utils.errors import ValidationError
from utils.ledger_service import parse_amount


def update(client, **body):
    payload = {'walletAddress': WALLET_A, 'amount': 10, 'type': 'credit'}
    payload.update(body)
    return client.post('/api/update-balance', json=payload)


class TestParseAmount:

    @pytest.mark.parametrize('raw', [5, 2.5, '7', '0.000001'])
    def test_valid(self, raw):
        assert parse_amount(raw) > 0

    @pytest.mark.parametrize('raw', [0, -3, 'abc', '', 'NaN', 'Infinity', True, [1]])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            parse_amount(raw)


class TestUpdateBalance:

    def test_credit(self, client, db, make_account, fixed_now):
        make_account(WALLET_A, enb_balance=40)

        response = update(client, amount=25, description='bonus')

        assert response.status_code == 200
        data = response.get_json()
        assert data['message'] == 'Balance updated successfully'
        assert data['previousBalance'] == 40
        assert data['newBalance'] == 65
        assert isinstance(data['transactionId'], int)

        assert reload_account(db, WALLET_A).enb_balance == 65
        record = db.session.get(BalanceTransaction, data['transactionId'])
        assert record.type == 'credit'
        assert record.description == 'bonus'
        assert record.balance_before == 40
        assert record.balance_after == 65

    def test_debit(self, client, db, make_account):
        make_account(WALLET_A, enb_balance=40)

        data = update(client, amount=15, type='debit').get_json()

        assert data['previousBalance'] == 40
        assert data['newBalance'] == 25
        assert reload_account(db, WALLET_A).enb_balance == 25

    def test_debit_exact_balance(self, client, db, make_account):
        make_account(WALLET_A, enb_balance=40)
        assert update(client, amount=40, type='debit').get_json()['newBalance'] == 0

    def test_insufficient_balance(self, client, db, make_account):
        make_account(WALLET_A, enb_balance=10)

        response = update(client, amount=11, type='debit')

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Insufficient balance'
        assert reload_account(db, WALLET_A).enb_balance == 10
        assert BalanceTransaction.query.count() == 0

    def test_fractional_amount(self, client, make_account):
        make_account(WALLET_A, enb_balance=1)
        assert update(client, amount='0.5').get_json()['newBalance'] == 1.5

    def test_total_earned_not_touched(self, client, db, make_account):
        make_account(WALLET_A, enb_balance=5, total_earned=5)
        update(client, amount=100)
        assert reload_account(db, WALLET_A).total_earned == 5

    def test_invalid_type(self, client, make_account):
        make_account(WALLET_A)
        response = update(client, type='refund')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid transaction type'

    @pytest.mark.parametrize('amount', [0, -5, 'lots'])
    def test_invalid_amount(self, client, make_account, amount):
        make_account(WALLET_A)
        response = update(client, amount=amount)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid amount'

    def test_missing_fields(self, client):
        response = client.post('/api/update-balance', json={'walletAddress': WALLET_A, 'amount': 5})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required fields'

    def test_account_not_found(self, client):
        response = update(client)
        assert response.status_code == 404


class TestTransactions:

    def test_newest_first_and_limited(self, client, make_account, monkeypatch):
        make_account(WALLET_A)
        make_account(WALLET_B)
        times = iter([datetime(2025, 9, d, 12, 0) for d in (1, 2, 3)])
        monkeypatch.setattr('utils.ledger_service.local_now', lambda: next(times))
        update(client, amount=1)
        update(client, amount=2)
        update(client, amount=3)
        monkeypatch.undo()
        update(client, walletAddress=WALLET_B, amount=9)

        data = client.get(f'/api/transactions/{WALLET_A}').get_json()
        assert [t['amount'] for t in data['transactions']] == [3, 2, 1]
        assert data['transactions'][0]['balanceBefore'] == 3
        assert data['transactions'][0]['balanceAfter'] == 6
        assert data['transactions'][0]['timestamp'] == '2025-09-03T12:00:00'

        data = client.get(f'/api/transactions/{WALLET_A}?limit=2').get_json()
        assert [t['amount'] for t in data['transactions']] == [3, 2]

    def test_unknown_wallet_has_no_history(self, client):
        data = client.get(f'/api/transactions/{WALLET_A}').get_json()
        assert data == {'transactions': []}
