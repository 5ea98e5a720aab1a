from dataclasses import dataclass, fields, asdict

from eth_abi import decode

from .errors import DecodeError
from .signatures import selector, ENCODE_DATA_1
from .utils import camel_to_snake


@dataclass(frozen=True)
class Attestation:
    id: str
    attester: str
    recipient: str
    ref_uid: str
    revocable: bool
    revocation_time: int
    expiration_time: int
    data: str
    time: int

    @classmethod
    def from_graphql(cls, row):

        if not isinstance(row, dict):
            raise DecodeError(f"Attestation row is not an object: {row!r}")

        values = {camel_to_snake(k): v for k, v in row.items()}

        missing = [f.name for f in fields(cls) if f.name not in values]
        if missing:
            raise DecodeError(f"Attestation {row.get('id')} is missing {', '.join(missing)}")

        try:
            return cls(
                id=values['id'],
                attester=values['attester'],
                recipient=values['recipient'],
                ref_uid=values['ref_uid'],
                revocable=bool(values['revocable']),
                revocation_time=int(values['revocation_time']),
                expiration_time=int(values['expiration_time']),
                data=values['data'],
                time=int(values['time']),
            )
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Attestation {row.get('id')} has a malformed field: {e}") from e

    @property
    def is_revoked(self):
        return self.revocation_time != 0

    def is_expired(self, now):
        return self.expiration_time != 0 and self.expiration_time <= now

    def to_dict(self):
        return asdict(self)


class AttestionMeta:
    def __init__(self, schema_id, **kwtypes):
        self.schema_id = schema_id
        self.kwtypes = kwtypes

    @property
    def name(self):
        return self.__class__.__name__

    def decode(self, data):
        types = list(self.kwtypes.values())
        encoded = bytes.fromhex(data.replace("0x", ""))
        result = decode(types, encoded)
        result = {k: v for k, v in zip(self.kwtypes.keys(), result)}

        def bytes_to_str(x):
            if isinstance(x, bytes):
                return "0x" + x.hex()
            return x

        result = {k : bytes_to_str(v) for k, v in result.items()}

        return result

class CredentialSchema(AttestionMeta):
    def __init__(self, schema_id):
        super().__init__(schema_id, subject="address", credId="uint256", data="bytes32")

    def decode(self, data):
        # Payloads written by create_attestation carry the encodeData selector.
        prefix = selector(ENCODE_DATA_1).hex()
        body = data.replace("0x", "")
        if len(body) % 64 == 8 and body.startswith(prefix):
            body = body[8:]
        return super().decode(body)


meta = {}

meta['sepolia'] = {
    'credential': CredentialSchema('0xb85ca4e8a36a93ab732bca0911a1517967905e8e0ff3267d161bfdf086e9b302'),
}
