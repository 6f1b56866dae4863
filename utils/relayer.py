# utils/relayer.py
import os
import json
import logging
from flask import current_app
from web3 import Web3
from web3.exceptions import TimeExhausted
from utils.errors import ExternalCallFailure, RelayerTimeout

# ----------------- 日志配置 -----------------
logger = logging.getLogger("relayer")
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ABIS_DIR = os.path.join(BASE_DIR, '..', 'abis')

DEFAULT_TX_TIMEOUT = 120
GAS_HEADROOM = 1.2
PRIORITY_FEE_GWEI = '2'


def load_contract_abi(name='EnbMiniApp.json'):
    with open(os.path.join(ABIS_DIR, name), 'r') as f:
        full_json = json.load(f)
    return full_json['abi']


class RelayerClient:
    """
    受信任的 relayer 钱包，代替用户调用 EnbMiniApp 合约并支付 gas。
    每次调用都等待链上确认后才返回交易哈希；超时不重试，避免重复提交。
    """

    def __init__(self, w3, contract, private_key, timeout=DEFAULT_TX_TIMEOUT):
        self.w3 = w3
        self.contract = contract
        self.private_key = private_key
        self.account = w3.eth.account.from_key(private_key)
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        provider = config.get('WEB3_PROVIDER')
        private_key = config.get('RELAYER_PRIVATE_KEY')
        contract_address = config.get('CONTRACT_ADDRESS')
        if not provider or not private_key or not contract_address:
            raise RuntimeError("Missing WEB3_PROVIDER, RELAYER_PRIVATE_KEY or CONTRACT_ADDRESS")

        w3 = Web3(Web3.HTTPProvider(provider))
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=load_contract_abi()
        )
        timeout = int(config.get('RELAYER_TX_TIMEOUT') or DEFAULT_TX_TIMEOUT)
        return cls(w3, contract, private_key, timeout=timeout)

    @property
    def address(self):
        return self.account.address

    def submit_daily_claim(self, user_address):
        user = Web3.to_checksum_address(user_address)
        return self._transact('dailyClaim', self.contract.functions.dailyClaim(user))

    def submit_membership_upgrade(self, user_address, level):
        if level not in (0, 1, 2):
            raise ValueError(f"Invalid membership level: {level}")
        user = Web3.to_checksum_address(user_address)
        return self._transact('upgradeMembership', self.contract.functions.upgradeMembership(user, level))

    def _build_fees(self):
        latest_block = self.w3.eth.get_block('latest')
        base_fee = latest_block.get('baseFeePerGas', 0)
        priority_fee = self.w3.to_wei(PRIORITY_FEE_GWEI, 'gwei')
        return {
            'maxFeePerGas': base_fee * 2 + priority_fee,
            'maxPriorityFeePerGas': priority_fee,
        }

    def _transact(self, method_name, contract_call):
        try:
            nonce = self.w3.eth.get_transaction_count(self.address, 'pending')
            gas_estimate = contract_call.estimate_gas({'from': self.address})
            tx = contract_call.build_transaction({
                'from': self.address,
                'nonce': nonce,
                'gas': int(gas_estimate * GAS_HEADROOM),
                **self._build_fees(),
            })
            signed_tx = self.w3.eth.account.sign_transaction(tx, private_key=self.private_key)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            tx_hash_hex = self.w3.to_hex(tx_hash)
            logger.info(f"[{method_name}] 交易已发送: {tx_hash_hex}")
        except Exception as e:
            logger.error(f"[{method_name}] 交易发送失败: {e}")
            raise ExternalCallFailure() from e

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.timeout)
        except TimeExhausted as e:
            logger.error(f"[{method_name}] 等待确认超时 ({self.timeout}s): {tx_hash_hex}")
            raise RelayerTimeout() from e
        except Exception as e:
            logger.error(f"[{method_name}] 等待确认失败: {tx_hash_hex} {e}")
            raise ExternalCallFailure() from e

        if receipt.get('status') != 1:
            logger.error(f"[{method_name}] 交易回滚: {tx_hash_hex}")
            raise ExternalCallFailure('Relayer transaction reverted')

        logger.info(f"[{method_name}] 交易已确认，区块: {receipt.get('blockNumber')}")
        return tx_hash_hex


def current_relayer():
    """create_app 注入的 relayer，未配置链参数时为 None"""
    return current_app.extensions.get('relayer')
