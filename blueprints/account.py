from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from utils.account_service import create_account, create_default_user, get_account, list_users

account_bp = Blueprint('account', __name__, url_prefix='/api')


def query_int(name, default, minimum=0):
    value = request.args.get(name, type=int)
    if value is None or value < minimum:
        return default
    return value


def is_text(*values):
    return all(isinstance(v, str) and v for v in values)


@account_bp.route('/create-account', methods=['POST'])
def create_account_route():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')
    transaction_hash = data.get('transactionHash')
    current_app.logger.info(f"Incoming /api/create-account call for {wallet_address}")

    if not is_text(wallet_address, transaction_hash):
        current_app.logger.warning(f"Missing fields: walletAddress={wallet_address} transactionHash={transaction_hash}")
        return jsonify({'error': 'Missing required fields'}), 400

    try:
        account = create_account(wallet_address, transaction_hash)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating account for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to create account'}), 500

    current_app.logger.info(f"Account created: {wallet_address} {account.invitation_code}")
    return jsonify({
        'message': 'Account created successfully',
        'invitationCode': account.invitation_code
    }), 201


@account_bp.route('/create-default-user', methods=['POST'])
def create_default_user_route():
    data = request.get_json(silent=True) or {}
    wallet_address = data.get('walletAddress')
    invitation_code = data.get('invitationCode')
    max_uses = data.get('maxUses')

    if not is_text(wallet_address, invitation_code):
        return jsonify({'error': 'Missing required fields'}), 400

    try:
        account = create_default_user(wallet_address, invitation_code, max_uses=max_uses)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating default user {wallet_address}: {e}")
        return jsonify({'error': 'Failed to create default user'}), 500

    return jsonify({
        'message': 'Default user created successfully',
        'invitationCode': account.invitation_code,
        'maxUses': account.max_invitation_uses
    }), 201


@account_bp.route('/profile/<wallet_address>', methods=['GET'])
def get_profile(wallet_address):
    try:
        account = get_account(wallet_address)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching profile for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to fetch profile'}), 500

    return jsonify(account.to_profile())


@account_bp.route('/users', methods=['GET'])
def get_users():
    limit = query_int('limit', 100, minimum=1)
    offset = query_int('offset', 0)
    membership_level = request.args.get('membershipLevel')
    is_activated = request.args.get('isActivated')
    if is_activated is not None:
        is_activated = is_activated == 'true'

    try:
        result = list_users(
            limit=limit,
            offset=offset,
            membership_level=membership_level,
            is_activated=is_activated
        )
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching users: {e}")
        return jsonify({'error': 'Failed to fetch users'}), 500

    return jsonify(result)
