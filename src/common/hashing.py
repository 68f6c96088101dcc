"""Hashing utilities."""

import hashlib


def generate_cluster_id(kind: str, seed_url: str) -> str:
    """Generate a run-scoped cluster ID from its kind and seed item URL."""
    digest = hashlib.sha256(f"{kind}:{seed_url}".encode()).hexdigest()[:16]
    return f"{kind}:{digest}"
