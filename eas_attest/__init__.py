"""Ethereum Attestation Service tooling: query attestations, attest, register schemas."""
