"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible JSON text. No random values.
Three tiers: a small flat object, a ~1 MB array of records, and a deeply
nested array that would overflow a recursive parser.
"""

from __future__ import annotations

import json
from typing import Any

import pytest


def generate_flat_object(num_keys: int, prefix: str = "key") -> str:
    """Generate a flat object with deterministic string values."""
    return json.dumps({f"{prefix}_{i}": f"value_{i}" for i in range(num_keys)})


def _make_records(count: int) -> str:
    """Generate an indented array of ``count`` mixed-kind records."""
    records: list[dict[str, Any]] = [
        {
            "id": i,
            "name": f"user \"{i}\" é",
            "active": i % 3 == 0,
            "score": i * 1.5e-3,
            "tags": [f"t{i % 7}", f"t{i % 11}"],
            "parent": None,
        }
        for i in range(count)
    ]
    return json.dumps(records, indent=2, ensure_ascii=False)


def _make_deep(depth: int) -> str:
    """Generate ``depth`` nested arrays around a single object."""
    return "[" * depth + '{"leaf": true}' + "]" * depth


# --- Fixtures for each size tier ---


@pytest.fixture
def doc_flat_10() -> str:
    """10-key flat object."""
    return generate_flat_object(10)


@pytest.fixture
def doc_records_5000() -> str:
    """5000 indented records, roughly 1 MB."""
    return _make_records(5000)


@pytest.fixture
def doc_deep_10000() -> str:
    """Arrays nested 10000 levels deep."""
    return _make_deep(10_000)
