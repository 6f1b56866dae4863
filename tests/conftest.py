"""
Shared fixtures: in-memory SQLite app, a fake relayer standing in for the
on-chain contract, and account builders.
"""

from datetime import datetime

import pytest

from app import create_app
from extensions import db as _db
from models import Account

WALLET_A = '0x' + 'a' * 40
WALLET_B = '0x' + 'b' * 40
WALLET_C = '0x' + 'c' * 40
WALLET_D = '0x' + 'd' * 40

FIXED_NOW = datetime(2025, 9, 10, 12, 0, 0)


class FakeRelayer:
    """Records calls and hands out deterministic tx hashes."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.side_effect = None
        self._counter = 0

    def _submit(self, call):
        self.calls.append(call)
        if self.side_effect:
            self.side_effect(*call)
        if self.error:
            raise self.error
        self._counter += 1
        return '0x' + format(self._counter, '064x')

    def submit_daily_claim(self, user_address):
        return self._submit(('dailyClaim', user_address))

    def submit_membership_upgrade(self, user_address, level):
        return self._submit(('upgradeMembership', user_address, level))


@pytest.fixture
def relayer():
    return FakeRelayer()


@pytest.fixture
def app(relayer):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'APP_ENV': 'test',
    }, relayer=relayer)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def fixed_now(monkeypatch):
    """Pin the service clock so calendar-day logic is deterministic."""
    for target in (
        'utils.claim_service.local_now',
        'utils.invitation_service.local_now',
        'utils.ledger_service.local_now',
        'utils.membership_service.local_now',
        'utils.account_service.local_now',
    ):
        monkeypatch.setattr(target, lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def make_account(db):
    counter = {'n': 0}

    def _make(wallet_address, **fields):
        counter['n'] += 1
        values = {
            'wallet_address': wallet_address,
            'invitation_code': fields.pop('invitation_code', f'CODE{counter["n"]:04d}'),
            'membership_level': 'Based',
            'enb_balance': 0,
            'total_earned': 0,
            'consecutive_days': 0,
            'is_activated': False,
            'created_at': datetime(2025, 1, 1, 0, 0, counter['n']),
        }
        values.update(fields)
        account = Account(**values)
        db.session.add(account)
        db.session.commit()
        return account

    return _make


def reload_account(db, wallet_address):
    db.session.expire_all()
    return db.session.get(Account, wallet_address)
