import re, os
import logging
from yaml import load, FullLoader, YAMLError
from pathlib import Path
from web3 import Web3

from .errors import ConfigurationError

logr = logging.getLogger(__name__)

pattern = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
def camel_to_snake(a_str):
    return pattern.sub('_', a_str).lower()

def config_dir():
    return Path(os.getenv('EAS_CONFIG_DIR', Path(__file__).parent / 'config'))

def default_network():
    return os.getenv('EAS_NETWORK', 'sepolia')

OVERRIDES = {
    'graphql': 'EAS_GRAPHQL_URL',
    'eas': 'EAS_CONTRACT_ADDRESS',
    'schema_registry': 'EAS_SCHEMA_REGISTRY_ADDRESS',
}

def load_config(network=None):

    network = network or default_network()

    path = config_dir() / 'networks.yaml'

    try:
        with open(path, 'r') as f:
            networks = load(f, Loader=FullLoader)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(networks, dict):
        raise ConfigurationError(f"{path} must map network names to settings")

    if network not in networks:
        raise ConfigurationError(f"Unknown network '{network}', expected one of: {', '.join(sorted(networks))}")

    config = dict(networks[network])
    config['name'] = network

    for key, env_name in OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            logr.debug(f"{key} overridden by {env_name}")
            config[key] = value

    return config

def require_env(name):

    value = os.getenv(name)

    if not value:
        raise ConfigurationError(f"{name} environment variable is not set")

    return value

def get_web3(rpc_url):

    if not rpc_url:
        raise ConfigurationError("An RPC url is required")

    return Web3(Web3.HTTPProvider(rpc_url))

def as_hex(x):
    if isinstance(x, str):
        return x if x.startswith("0x") else "0x" + x
    return Web3.to_hex(x)

def as_bytes(x):
    if isinstance(x, str):
        return bytes.fromhex(x.replace("0x", ""))
    return bytes(x)

def to_bytes32(value):

    raw = as_bytes(value)

    if len(raw) != 32:
        raise ValueError(f"expected 32 bytes, got {len(raw)}: {value}")

    return raw
