"""
readers.py

Resolve a stake overrides locator and decode what it points at.

A locator naming an existing local path is always read as a file, even when
it would also parse as a URL. Only otherwise is it treated as a URL and
fetched over HTTP.
"""

import logging
import os
from typing import Optional
from urllib.parse import urlsplit

import requests
import yaml
from pydantic import ValidationError
from urllib3.exceptions import LocationParseError

from .errors import ConfigurationError, DecodeError, ReadError, TransportError
from .models import StakedNodesOverrides

__all__ = [
    "decode_overrides",
    "read_from_local_file",
    "read_from_url",
    "read_overrides",
]

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0


class UniqueKeySafeLoader(yaml.SafeLoader):
    """``SafeLoader`` that rejects a key repeated within one mapping."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        pairs = node.value if isinstance(node, yaml.MappingNode) else []
        for key_node, _ in pairs:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # unhashable; the base constructor reports it
                continue
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def decode_overrides(text: str) -> StakedNodesOverrides:
    """
    Decode a YAML document into ``StakedNodesOverrides``.
    An empty document yields the defaults.
    """
    try:
        data = yaml.load(text, Loader=UniqueKeySafeLoader)
    except yaml.YAMLError as e:
        raise DecodeError(f"Invalid YAML: {e}") from e

    try:
        return StakedNodesOverrides.model_validate({} if data is None else data)
    except ValidationError as e:
        raise DecodeError(f"Invalid stake overrides document: {e}") from e


def read_from_local_file(path: str) -> StakedNodesOverrides:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Cannot read {path}: {e}") from e
    return decode_overrides(text)


def read_from_url(url: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> StakedNodesOverrides:
    """
    Fetch ``url`` with a blocking GET and decode the body.
    Any non-2xx response is treated as a transport failure, as is a URL
    that urllib3 refuses to parse (e.g. an empty host label).
    """
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        text = resp.text
    except (requests.RequestException, LocationParseError, ValueError) as e:
        raise TransportError(f"Cannot fetch {url}: {e}") from e
    return decode_overrides(text)


def _parse_url(locator: str) -> Optional[str]:
    # Any scheme counts; unsupported ones fail later as transport errors
    try:
        parts = urlsplit(locator)
    except ValueError:
        return None
    if parts.scheme:
        return locator
    return None


def read_overrides(locator: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> StakedNodesOverrides:
    """Read overrides from ``locator``, trying a local path before a URL."""
    if os.path.exists(locator):
        logger.debug("Reading stake overrides from file %s", locator)
        return read_from_local_file(locator)

    url = _parse_url(locator)
    if url is not None:
        logger.debug("Fetching stake overrides from %s", url)
        return read_from_url(url, timeout=timeout)

    raise ConfigurationError(f"Config cannot be loaded: no suitable reader for {locator!r}")
