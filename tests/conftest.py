"""
Pytest configuration and fixtures for causalsort tests.
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import os
from typing import Callable, Dict, Generator

import pytest

from causalsort.config import reset_config
from causalsort.identifiers import Multihash


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config_env() -> Generator[None, None, None]:
    """Drop CAUSALSORT_* variables and the cached config around each test."""
    original: Dict[str, str] = {
        key: value for key, value in os.environ.items() if key.startswith("CAUSALSORT_")
    }
    for key in original:
        del os.environ[key]
    reset_config()

    yield

    for key in [k for k in os.environ if k.startswith("CAUSALSORT_")]:
        del os.environ[key]
    os.environ.update(original)
    reset_config()


@pytest.fixture(autouse=True)
def reset_causalsort_logger() -> Generator[None, None, None]:
    """Undo handlers installed by configure_logging so caplog keeps working."""
    yield
    logger = logging.getLogger("causalsort")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ============================================================================
# Identifier Fixtures
# ============================================================================


def message_id_text(name: str) -> str:
    """Deterministic message identifier text derived from a name."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return "%" + base64.b64encode(digest).decode("ascii") + ".sha256"


@pytest.fixture
def make_id() -> Callable[[str], Multihash]:
    """Factory for deterministic message identifiers."""

    def _make(name: str) -> Multihash:
        return Multihash.from_legacy(message_id_text(name))

    return _make


@pytest.fixture
def thread_messages(make_id):
    """Root post with two replies, supplied out of order.

    reply2 references both root and reply1.
    """
    root = make_id("root")
    reply1 = make_id("reply1")
    reply2 = make_id("reply2")

    root_body = json.dumps({"type": "post", "text": "hello"})
    reply1_body = json.dumps({"type": "post", "root": str(root)})
    reply2_body = json.dumps({"type": "post", "root": str(root), "branch": str(reply1)})

    return [
        (reply1, "reply1", reply1_body),
        (root, "root", root_body),
        (reply2, "reply2", reply2_body),
    ]
