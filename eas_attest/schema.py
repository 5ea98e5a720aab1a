import logging

from web3 import Web3

from .chain_client import chain_client_from_env
from .errors import DecodeError
from .signatures import REGISTER_1, ZERO_ADDRESS, encode_call
from .utils import as_hex, load_config

logr = logging.getLogger(__name__)

CREDENTIAL_SCHEMA = 'address subject,uint256 credId,bytes32 data'

def encode_register_call(schema, resolver=ZERO_ADDRESS, revocable=True):
    return encode_call(REGISTER_1, [schema, Web3.to_checksum_address(resolver), bool(revocable)])

def schema_uid_from_receipt(receipt, registry_address):

    for log in receipt.get('logs', []):
        if log['address'].lower() == registry_address.lower() and len(log['topics']) > 1:
            return as_hex(log['topics'][1])

    raise DecodeError(f"No Registered log from {registry_address} in receipt")

def submit_schema(client, registry_address, schema, resolver=ZERO_ADDRESS, revocable=True):

    logr.info("Creating schema...")
    logr.info(f"Schema: {schema}")
    logr.info(f"Resolver: {resolver}")
    logr.info(f"Revocable: {revocable}")

    data = encode_register_call(schema, resolver, revocable)
    logr.info(f"Encoded data: {data}")

    simulated = client.simulate(registry_address, data)
    logr.info(f"Simulation result: {simulated}")

    tx_hash = client.send_transaction(registry_address, data)
    logr.info(f"Transaction hash: {tx_hash}")

    receipt = client.wait_for_receipt(tx_hash)

    logr.info("Schema registered successfully!")
    logr.info(f"Transaction receipt: {dict(receipt)}")

    schema_uid = schema_uid_from_receipt(receipt, registry_address)
    logr.info(f"Schema UID: {schema_uid}")

    return tx_hash, schema_uid

def create_schema(client=None, network=None, schema=CREDENTIAL_SCHEMA, resolver=ZERO_ADDRESS, revocable=True):
    """
    Register `schema` with the network's SchemaRegistry. Returns the schema UID,
    or None when simulation, submission or confirmation fails.
    """

    config = load_config(network)

    if client is None:
        client = chain_client_from_env(network)

    try:
        _, schema_uid = submit_schema(client, config['schema_registry'], schema, resolver, revocable)
    except Exception as e:
        logr.error(f"Error registering schema: {e}")
        return None

    return schema_uid
