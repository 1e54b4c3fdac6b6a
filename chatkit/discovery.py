"""Service address helpers: environment lookups and a direct address resolver."""

from __future__ import annotations

import logging
import os
import random
from typing import Sequence
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ENDPOINT_SEP_CHAR = ","
SUBSET_SIZE = 32
_SLASH = "/"
_SCHEME = "direct"


def get_env(key: str, fallback: str) -> str:
    """Return the environment variable if it is set, even to "", else fallback."""
    if key in os.environ:
        return os.environ[key]
    return fallback


def get_zk_addr_from_env(fallback: list[str]) -> list[str]:
    """Return ZooKeeper addresses built from ZOOKEEPER_ADDRESS and ZOOKEEPER_PORT."""
    if "ZOOKEEPER_ADDRESS" in os.environ and "ZOOKEEPER_PORT" in os.environ:
        port = os.environ["ZOOKEEPER_PORT"]
        return [f"{addr}:{port}" for addr in os.environ["ZOOKEEPER_ADDRESS"].split(",")]
    return fallback


def get_endpoints(target: str) -> str:
    """Return the endpoint list held in the path of a target URL."""
    return urlsplit(target).path.strip(_SLASH)


def subset(items: Sequence[str], size: int) -> list[str]:
    """Return at most size of the items, in random order."""
    return random.sample(list(items), min(len(items), size))


class ResolverDirect:
    """Resolves "direct:///host:port,host:port" targets to their addresses."""

    def scheme(self) -> str:
        return _SCHEME

    def build(self, target: str) -> list[str]:
        """Return up to SUBSET_SIZE addresses named by the target."""
        logger.debug("Build target %s", target)
        endpoints = [e for e in get_endpoints(target).split(ENDPOINT_SEP_CHAR) if e]
        return subset(endpoints, SUBSET_SIZE)