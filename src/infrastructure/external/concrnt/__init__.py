"""Concrnt social-network adapter: REST client, credential and document signer."""
