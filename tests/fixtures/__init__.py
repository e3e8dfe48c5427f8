"""Shared test fixtures for the Merkle tree tests."""
