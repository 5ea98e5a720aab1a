import logging
import requests as r
from typing import List

from .errors import TransportError, DecodeError

logr = logging.getLogger(__name__)

ATTESTATIONS_QUERY = """
        query Attestations($where: AttestationWhereInput, $take: Int) {
        attestations(where: $where, take: $take) {
            id
            attester
            recipient
            refUID
            revocable
            revocationTime
            expirationTime
            data
            time
        }
        }
        """

SCHEMA_QUERY = """
        query GetSchema($where: SchemaWhereUniqueInput!) {
        getSchema(where: $where) {
            id
            index
            resolver
            revocable
            schema
            time
            txid
            creator
        }
        }
        """

class EASGraphQLClient:

    def __init__(self, url, session=None, timeout=30):
        self.url = url
        self.session = session or r.Session()
        self.timeout = timeout

    def query(self, QUERY, VARIABLES):

        logr.debug(f"Hitting: {self.url} with {VARIABLES}")

        try:
            resp = self.session.post(self.url, json={'query': QUERY , 'variables': VARIABLES}, timeout=self.timeout)
            resp.raise_for_status()
        except r.RequestException as e:
            raise TransportError(f"GraphQL request to {self.url} failed: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise DecodeError(f"GraphQL response from {self.url} is not JSON") from e

        if not isinstance(payload, dict):
            raise DecodeError(f"GraphQL response from {self.url} is not an object")

        if payload.get('errors'):
            messages = "; ".join(str(err.get('message', err)) for err in payload['errors'])
            raise DecodeError(f"GraphQL errors: {messages}")

        if payload.get('data') is None:
            raise DecodeError(f"GraphQL response from {self.url} has no data")

        return payload['data']

    def get_attestations(self, where, take) -> List:

        VARIABLES = {
            "where": where,
            "take": take
        }

        data = self.query(ATTESTATIONS_QUERY, VARIABLES)

        attestations = data.get('attestations')
        if not isinstance(attestations, list):
            raise DecodeError("GraphQL response is missing the attestations list")

        return attestations

    def get_schema(self, schema_id):

        VARIABLES = {
            "where": {"id": schema_id}
        }

        data = self.query(SCHEMA_QUERY, VARIABLES)

        return data.get('getSchema')
