"""Chat data sources and a registry of the ones with data available."""

import logging

from ..source import ChatDataSource
from .json_file import JsonFileSource

logger = logging.getLogger(__name__)


def get_available_sources() -> list[ChatDataSource]:
    """Return the configured sources that currently have data to read."""
    sources = []
    for SourceClass in [JsonFileSource]:
        source = SourceClass()
        if source.is_available():
            sources.append(source)
        else:
            logger.debug("Source %s has no data", source.name)
    return sources
