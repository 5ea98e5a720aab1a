from __future__ import annotations

from typing import Any

import pytest
import requests

RECIPIENT = "0x6D83cac25CfaCdC7035Bed947B92b64e6a8B8090"
ATTESTER = "0xD892F010cc6B13dF6BBF1f5699bd7cDF1ec23595"
SCHEMA_ID = "0xb85ca4e8a36a93ab732bca0911a1517967905e8e0ff3267d161bfdf086e9b302"

SEPOLIA_EAS = "0xC2679fBD37d54388Ce493F1DB75320D236e1815e"
SEPOLIA_REGISTRY = "0x0a7E2Ff54e76B8E6659aedc9103FB21c038050D0"

# anvil account #1, never funded anywhere real
TEST_KEY = "59c6995e998f97a5a0044966f0945382d1b83f5f8b2e70e9a1baddb5f9d0c2d7"

TX_HASH = "0x" + "ab" * 32


class FakeResp:
    def __init__(self, payload: Any, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Stands in for requests.Session; records every POST."""

    def __init__(self, payload: Any = None, status_code: int = 200, exc: Exception | None = None):
        self.payload = payload
        self.status_code = status_code
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, json: dict[str, Any], timeout: float | None = None) -> FakeResp:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return FakeResp(self.payload, self.status_code)


class FakeChainClient:
    """Stands in for ChainClient; records simulate/send calls and returns canned receipts."""

    address = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    def __init__(self, receipt: dict[str, Any] | None = None, fail_on: str | None = None, exc: Exception | None = None):
        self.receipt = receipt if receipt is not None else {"status": 1, "logs": []}
        self.fail_on = fail_on
        self.exc = exc or RuntimeError("boom")
        self.simulated: list[tuple[str, str]] = []
        self.sent: list[tuple[str, str]] = []
        self.waited: list[str] = []

    def _maybe_fail(self, step: str) -> None:
        if self.fail_on == step:
            raise self.exc

    def simulate(self, to: str, data: str, value: int = 0) -> str:
        self._maybe_fail("simulate")
        self.simulated.append((to, data))
        return "0x" + "11" * 32

    def send_transaction(self, to: str, data: str, value: int = 0) -> str:
        self._maybe_fail("send")
        self.sent.append((to, data))
        return TX_HASH

    def wait_for_receipt(self, tx_hash: str, timeout: int = 120, poll_latency: int = 2) -> dict[str, Any]:
        self._maybe_fail("wait")
        self.waited.append(tx_hash)
        return self.receipt


def graphql_row(uid: str, expiration: int = 0, time: int = 1_700_000_000) -> dict[str, Any]:
    return {
        "id": uid,
        "attester": ATTESTER,
        "recipient": RECIPIENT,
        "refUID": "0x" + "00" * 32,
        "revocable": True,
        "revocationTime": 0,
        "expirationTime": expiration,
        "data": "0x" + "00" * 96,
        "time": time,
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "EAS_CONFIG_DIR",
        "EAS_NETWORK",
        "EAS_GRAPHQL_URL",
        "EAS_CONTRACT_ADDRESS",
        "EAS_SCHEMA_REGISTRY_ADDRESS",
        "PRIVATE_KEY",
        "SEPOLIA_RPC_URL",
    ):
        monkeypatch.delenv(name, raising=False)
