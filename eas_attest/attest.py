import logging

from eth_abi import encode, decode
from web3 import Web3

from .chain_client import chain_client_from_env
from .signatures import ATTEST_1, ENCODE_DATA_1, ATTESTED_1, ZERO_BYTES32, arg_types, encode_call, selector, topic
from .utils import as_bytes, as_hex, load_config, to_bytes32

logr = logging.getLogger(__name__)

def encode_credential_data(subject, cred_id, data):
    """
    Attestation payload: an `encodeData(address subject, uint256 credId, bytes32 data)`
    call, selector included.
    """

    args = [Web3.to_checksum_address(subject), int(cred_id), to_bytes32(data)]

    return selector(ENCODE_DATA_1) + encode(arg_types(ENCODE_DATA_1), args)

def encode_attest_call(schema_uid, recipient, payload):

    payload = as_bytes(payload)

    request = (
        to_bytes32(schema_uid),
        (
            Web3.to_checksum_address(recipient),
            0,                          # expirationTime: never
            True,                       # revocable
            to_bytes32(ZERO_BYTES32),   # refUID: none
            payload,
            0,                          # value
        ),
    )

    return encode_call(ATTEST_1, [request])

def attestation_uid_from_receipt(receipt, eas_address):

    attested = topic(ATTESTED_1).lower()

    for log in receipt.get('logs', []):

        if log['address'].lower() != eas_address.lower():
            continue

        topics = [as_hex(t).lower() for t in log['topics']]
        if not topics or topics[0] != attested:
            continue

        (uid,) = decode(['bytes32'], as_bytes(log['data'])[:32])
        return Web3.to_hex(uid)

    return None

def submit_attestation(client, eas_address, subject, cred_id, data, schema_uid):

    payload = encode_credential_data(subject, cred_id, data)
    calldata = encode_attest_call(schema_uid, subject, payload)

    logr.debug(f"Encoded data: {calldata}")

    tx_hash = client.send_transaction(eas_address, calldata)
    logr.info(f"Transaction hash: {tx_hash}")

    receipt = client.wait_for_receipt(tx_hash)

    return tx_hash, receipt

def create_attestation(subject, cred_id, data, schema_uid, client=None, network=None):
    """
    Attest `cred_id`/`data` about `subject` under `schema_uid`.

    Returns the transaction hash once mined, or None if anything after client
    provisioning fails. Missing PRIVATE_KEY / RPC url raise ConfigurationError
    before any network call.
    """

    config = load_config(network)

    if client is None:
        client = chain_client_from_env(network)

    try:
        tx_hash, receipt = submit_attestation(client, config['eas'], subject, cred_id, data, schema_uid)

        logr.info("Attestation created successfully!")
        logr.info(f"Transaction receipt: {dict(receipt)}")

        uid = attestation_uid_from_receipt(receipt, config['eas'])
        if uid is not None:
            logr.info(f"Attestation UID: {uid}")
    except Exception as e:
        logr.error(f"Error creating attestation: {e}")
        return None

    return tx_hash
