import logging
import sys
import time
from pprint import pformat

import click

from .attest import create_attestation
from .attestations import meta as all_meta
from .errors import EASError
from .graphqleas_client import EASGraphQLClient
from .query import get_attestations, attestations_to_frame, DEFAULT_LIMIT
from .schema import create_schema, CREDENTIAL_SCHEMA
from .signatures import ZERO_ADDRESS, ZERO_BYTES32
from .utils import load_config, default_network

RECIPIENT = '0x6D83cac25CfaCdC7035Bed947B92b64e6a8B8090'
VERIFIER = '0xD892F010cc6B13dF6BBF1f5699bd7cDF1ec23595'
SCHEMA_ID = '0xb85ca4e8a36a93ab732bca0911a1517967905e8e0ff3267d161bfdf086e9b302'


def decode_payload(network, attestation, schemas):

    schemas = {s.lower() for s in schemas}

    for schema_meta in all_meta.get(network, {}).values():
        if schema_meta.schema_id.lower() not in schemas:
            continue
        try:
            return schema_meta.decode(attestation.data)
        except Exception:
            continue

    return None


def attestation_status(attestation, now):

    if attestation.is_revoked:
        return "revoked"
    if attestation.is_expired(now):
        return "expired"
    return "active"


@click.group()
@click.option('--network', default=default_network, show_default='$EAS_NETWORK or sepolia', help='Entry in networks.yaml.')
@click.option('-v', '--verbose', is_flag=True, help='Debug logging.')
@click.pass_context
def main(ctx, network, verbose):

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    ctx.obj = {'network': network}


@main.command('check-attestations')
@click.argument('recipient', default=RECIPIENT)
@click.option('--schema', 'schemas', multiple=True, default=[SCHEMA_ID], show_default=True)
@click.option('--attester', default=VERIFIER, show_default=True)
@click.option('--limit', default=DEFAULT_LIMIT, show_default=True, type=int)
@click.option('--include-expired', is_flag=True, help='Drop the expiration condition.')
@click.option('--revoked', is_flag=True, help='Return revoked attestations instead.')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), default=None, help='Also write the records to this CSV file.')
@click.pass_context
def check_attestations(ctx, recipient, schemas, attester, limit, include_expired, revoked, csv_path):

    network = ctx.obj['network']

    options = {
        'schemas': list(schemas),
        'attester': attester or None,
        'limit': limit,
        'revoked': revoked,
    }

    if include_expired:
        options['expiration_time'] = None

    now = time.time()
    attestations = get_attestations(recipient, network, options)

    if len(attestations) > 0:
        click.echo('Attestations found:')
        for attestation in attestations:
            click.echo(pformat(attestation.to_dict()))
            click.echo(f"  status: {attestation_status(attestation, now)}")
            payload = decode_payload(network, attestation, schemas)
            if payload is not None:
                click.echo(f"  decoded: {payload}")
    else:
        click.echo('No attestations found for the given parameters.')

    if csv_path:
        attestations_to_frame(attestations).to_csv(csv_path, index=False)
        click.echo("Creating/Overwriting: " + csv_path)


@main.command('create-attestation')
@click.argument('subject', default=RECIPIENT)
@click.option('--cred-id', default=1, show_default=True, type=int)
@click.option('--data', default=ZERO_BYTES32, show_default=True, help='bytes32 hex.')
@click.option('--schema', 'schema_uid', default=SCHEMA_ID, show_default=True)
@click.pass_context
def create_attestation_cmd(ctx, subject, cred_id, data, schema_uid):

    try:
        tx_hash = create_attestation(subject, cred_id, data, schema_uid, network=ctx.obj['network'])
    except EASError as e:
        raise click.ClickException(str(e))

    if tx_hash is None:
        click.echo('❌ Attestation was not created.', err=True)
        sys.exit(1)

    click.echo(tx_hash)


@main.command('create-schema')
@click.option('--schema', default=CREDENTIAL_SCHEMA, show_default=True)
@click.option('--resolver', default=ZERO_ADDRESS, show_default=True)
@click.option('--irrevocable', is_flag=True, help='Register attestations under this schema as non-revocable.')
@click.pass_context
def create_schema_cmd(ctx, schema, resolver, irrevocable):

    try:
        schema_uid = create_schema(network=ctx.obj['network'], schema=schema, resolver=resolver, revocable=not irrevocable)
    except EASError as e:
        raise click.ClickException(str(e))

    if schema_uid is None:
        click.echo('❌ Schema was not registered.', err=True)
        sys.exit(1)

    click.echo(schema_uid)


@main.command('show-schema')
@click.argument('schema_uid', default=SCHEMA_ID)
@click.pass_context
def show_schema(ctx, schema_uid):

    try:
        config = load_config(ctx.obj['network'])
        schema = EASGraphQLClient(config['graphql']).get_schema(schema_uid)
    except EASError as e:
        raise click.ClickException(str(e))

    if schema is None:
        click.echo(f"❌ No schema {schema_uid} on {config['name']}", err=True)
        sys.exit(1)

    click.echo(pformat(schema))


if __name__ == '__main__':
    main()
