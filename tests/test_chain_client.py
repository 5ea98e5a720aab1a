from __future__ import annotations

from types import SimpleNamespace

import pytest
import requests
from eth_account import Account
from web3.exceptions import ContractLogicError, TimeExhausted

from conftest import SEPOLIA_EAS, TEST_KEY
from eas_attest.chain_client import ChainClient, chain_client_from_env, provision_chain_client, translate_errors
from eas_attest.errors import ConfigurationError, ContractRevertError, TransportError

SIGNER = Account.from_key("0x" + TEST_KEY).address


class FakeEth:
    chain_id = 11155111
    gas_price = 1_000_000_000

    def __init__(self, receipt=None):
        self.receipt = receipt or {"status": 1, "logs": []}
        self.raw_sent: list[bytes] = []
        self.estimated: list[dict] = []

    def get_transaction_count(self, address, block_identifier):
        assert address == SIGNER
        assert block_identifier == "pending"
        return 4

    def estimate_gas(self, tx):
        self.estimated.append(dict(tx))
        return 90_000

    def send_raw_transaction(self, raw):
        self.raw_sent.append(bytes(raw))
        return b"\x01" * 32

    def call(self, tx):
        if tx["data"] == "0xdead":
            raise ContractLogicError("execution reverted")
        return b"\x02" * 32

    def wait_for_transaction_receipt(self, tx_hash, timeout, poll_latency):
        return self.receipt


def _client(eth: FakeEth) -> ChainClient:
    return ChainClient(SimpleNamespace(eth=eth), Account.from_key("0x" + TEST_KEY))


def test_provision_accepts_key_without_prefix() -> None:
    client = provision_chain_client(TEST_KEY, "http://localhost:8545")
    assert client.address == SIGNER


def test_provision_rejects_bad_key() -> None:
    with pytest.raises(ConfigurationError):
        provision_chain_client("zz", "http://localhost:8545")


def test_provision_requires_rpc_url() -> None:
    with pytest.raises(ConfigurationError):
        provision_chain_client(TEST_KEY, "")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRIVATE_KEY", "0x" + TEST_KEY)
    monkeypatch.setenv("SEPOLIA_RPC_URL", "http://localhost:8545")
    assert chain_client_from_env("sepolia").address == SIGNER


def test_send_transaction_signs_locally() -> None:
    eth = FakeEth()

    tx_hash = _client(eth).send_transaction(SEPOLIA_EAS.lower(), "0x1234")

    assert tx_hash == "0x" + "01" * 32
    assert len(eth.raw_sent) == 1
    tx = eth.estimated[0]
    assert tx["to"] == SEPOLIA_EAS
    assert tx["from"] == SIGNER
    assert tx["nonce"] == 4
    assert tx["chainId"] == 11155111
    assert tx["value"] == 0


def test_simulate() -> None:
    assert _client(FakeEth()).simulate(SEPOLIA_EAS, "0x1234") == "0x" + "02" * 32


def test_simulate_revert() -> None:
    with pytest.raises(ContractRevertError):
        _client(FakeEth()).simulate(SEPOLIA_EAS, "0xdead")


def test_failed_receipt_is_revert() -> None:
    with pytest.raises(ContractRevertError) as info:
        _client(FakeEth(receipt={"status": 0, "logs": []})).wait_for_receipt("0x" + "ab" * 32)
    assert info.value.tx_hash == "0x" + "ab" * 32


def test_translate_errors() -> None:
    with pytest.raises(TransportError):
        with translate_errors("wait"):
            raise TimeExhausted("120s")

    with pytest.raises(TransportError):
        with translate_errors("send"):
            raise requests.ConnectionError("refused")

    with pytest.raises(ContractRevertError):
        with translate_errors("call"):
            raise ContractLogicError("execution reverted")

    with pytest.raises(KeyError):
        with translate_errors("other"):
            raise KeyError("not ours")
