import time
import numbers
import logging

import pandas as pd

from .attestations import Attestation
from .graphqleas_client import EASGraphQLClient
from .utils import load_config

logr = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

FILTER_KEYS = ('revoked', 'expiration_time', 'schemas', 'attester', 'limit')

def default_filters(now=None):

    if now is None:
        now = time.time()

    return {
        'revoked': False,
        'expiration_time': round(now),
        'limit': DEFAULT_LIMIT,
    }

def get_attestation_query_variables(address, filters):
    """
    Build the `where` / `take` variables of the attestations query.

    A numeric `expiration_time`, truncated to whole seconds, keeps non-expiring
    attestations (expirationTime == 0) and those expiring strictly after the
    cutoff. `None` drops the condition.
    """

    conditions = {
        'recipient': {'equals': address},
        'revoked': {'equals': filters['revoked']},
    }

    expiration_time = filters.get('expiration_time')
    if isinstance(expiration_time, numbers.Real) and not isinstance(expiration_time, bool):
        cutoff = int(expiration_time)
        conditions['OR'] = [{'expirationTime': {'equals': 0}}, {'expirationTime': {'gt': cutoff}}]

    schemas = filters.get('schemas')
    if schemas:
        conditions['schemaId'] = {'in': list(schemas)}

    if filters.get('attester'):
        conditions['attester'] = {'equals': filters['attester']}

    return {
        'where': conditions,
        'take': filters['limit'],
    }

def get_attestations_by_filter(address, filters, network=None, client=None):

    if client is None:
        config = load_config(network)
        client = EASGraphQLClient(config['graphql'])

    variables = get_attestation_query_variables(address, filters)

    rows = client.get_attestations(variables['where'], variables['take'])

    logr.info(f"👉 {len(rows)} attestation(s) for {address}")

    return [Attestation.from_graphql(row) for row in rows]

def get_attestations(address, network=None, options=None, client=None, now=None):
    """
    Query attestations received by `address`.

    `options` is a partial filter merged over `default_filters()`. Any failure is
    logged and yields an empty list, so "nothing found" and "query failed" look
    the same to the caller; use `get_attestations_by_filter` to tell them apart.
    """

    try:
        options = dict(options or {})

        unknown = set(options) - set(FILTER_KEYS)
        if unknown:
            raise ValueError(f"Unknown filter option(s): {', '.join(sorted(unknown))}")

        filters = default_filters(now)
        filters.update(options)

        return get_attestations_by_filter(address, filters, network=network, client=client)
    except Exception as e:
        logr.error(f"Error in get_attestations: {e}")
        return []

def attestations_to_frame(attestations):

    columns = list(Attestation.__dataclass_fields__.keys())

    return pd.DataFrame([a.to_dict() for a in attestations], columns=columns)
