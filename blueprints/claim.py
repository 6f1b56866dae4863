from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from web3 import Web3
from extensions import db
from blueprints.account import is_text, query_int
from utils.claim_service import daily_claim
from utils.ledger_service import update_balance, get_transactions
from utils.relayer import current_relayer

claim_bp = Blueprint('claim', __name__, url_prefix='/api')


def is_wallet_address(value):
    return isinstance(value, str) and Web3.is_address(value)


# Daily claim with smart contract interaction via trusted relayer
@claim_bp.route('/daily-claim', methods=['POST'])
def daily_claim_route():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')

    if not wallet_address or not is_wallet_address(wallet_address):
        return jsonify({'error': 'Missing or invalid wallet address'}), 400

    try:
        result = daily_claim(wallet_address, current_relayer())
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Daily claim error for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to process daily claim'}), 500

    return jsonify(result)


@claim_bp.route('/update-balance', methods=['POST'])
def update_balance_route():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')
    amount = data.get('amount')
    tx_type = data.get('type')
    description = data.get('description')

    if not is_text(wallet_address, tx_type) or amount is None:
        return jsonify({'error': 'Missing required fields'}), 400
    if description is not None and not isinstance(description, str):
        return jsonify({'error': 'Invalid description'}), 400

    try:
        result = update_balance(wallet_address, amount, tx_type, description)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating balance for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to update balance'}), 500

    return jsonify(result)


@claim_bp.route('/transactions/<wallet_address>', methods=['GET'])
def get_transactions_route(wallet_address):
    limit = query_int('limit', 50, minimum=1)

    try:
        transactions = get_transactions(wallet_address, limit=limit)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching transactions for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to fetch transactions'}), 500

    return jsonify({'transactions': transactions})
