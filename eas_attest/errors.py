class EASError(Exception):
    """Base for every failure raised by eas_attest."""

class ConfigurationError(EASError):
    """Missing or invalid configuration. Raised before any network call."""

class TransportError(EASError):
    """The GraphQL endpoint or the JSON-RPC node could not be reached, or answered with an error status."""

class DecodeError(EASError):
    """A response arrived but could not be turned into the expected shape."""

class ContractRevertError(EASError):
    """A simulated call or a mined transaction reverted."""

    def __init__(self, message, tx_hash=None):
        super().__init__(message)
        self.tx_hash = tx_hash
