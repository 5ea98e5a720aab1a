import logging
from contextlib import contextmanager

import requests
from eth_account import Account
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from .errors import ConfigurationError, ContractRevertError, TransportError
from .utils import get_web3, load_config, require_env

logr = logging.getLogger(__name__)

@contextmanager
def translate_errors(action, tx_hash=None):

    try:
        yield
    except ContractLogicError as e:
        raise ContractRevertError(f"{action} reverted: {e}", tx_hash=tx_hash) from e
    except TimeExhausted as e:
        raise TransportError(f"{action} timed out: {e}") from e
    except (Web3Exception, requests.RequestException) as e:
        raise TransportError(f"{action} failed: {e}") from e


class ChainClient:
    """
    Signer plus node connection. Everything the write paths need from the chain
    goes through these four calls, so tests can swap in a fake.
    """

    def __init__(self, w3, account):
        self.w3 = w3
        self.account = account

    @property
    def address(self):
        return self.account.address

    def simulate(self, to, data, value=0):

        call = {'from': self.address, 'to': Web3.to_checksum_address(to), 'data': data, 'value': value}

        with translate_errors(f"Simulation of call to {to}"):
            result = self.w3.eth.call(call)

        return Web3.to_hex(result)

    def send_transaction(self, to, data, value=0):

        w3 = self.w3

        with translate_errors(f"Transaction to {to}"):
            tx = {
                'from': self.address,
                'to': Web3.to_checksum_address(to),
                'data': data,
                'value': value,
                'nonce': w3.eth.get_transaction_count(self.address, 'pending'),
                'chainId': w3.eth.chain_id,
                'gasPrice': w3.eth.gas_price,
            }
            tx['gas'] = w3.eth.estimate_gas(tx)

            signed = self.account.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)

        return Web3.to_hex(tx_hash)

    def wait_for_receipt(self, tx_hash, timeout=120, poll_latency=2):

        with translate_errors(f"Waiting for {tx_hash}", tx_hash=tx_hash):
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout, poll_latency=poll_latency)

        if receipt['status'] == 0:
            raise ContractRevertError(f"Transaction {tx_hash} reverted", tx_hash=tx_hash)

        return receipt


def provision_chain_client(private_key, rpc_url):

    if not private_key:
        raise ConfigurationError("A private key is required")

    if not private_key.startswith('0x'):
        private_key = '0x' + private_key

    try:
        account = Account.from_key(private_key)
    except Exception as e:
        raise ConfigurationError(f"Invalid private key: {e}") from e

    w3 = get_web3(rpc_url)

    logr.info(f"Signer {account.address}")

    return ChainClient(w3, account)

def chain_client_from_env(network=None):

    config = load_config(network)

    private_key = require_env('PRIVATE_KEY')
    rpc_url = require_env(config['rpc_env'])

    return provision_chain_client(private_key, rpc_url)
