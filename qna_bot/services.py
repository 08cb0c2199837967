"""
External services available to the bot.
"""

import json
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from pydantic import ValidationError

from .config import Config, config as default_config
from .errors import ConfigurationError
from .models import KnowledgeBaseEndpoint, ServiceType

logger = logging.getLogger(__name__)


class BotServices:
    """Knowledge bases the bot can query, keyed by service name."""

    def __init__(self, qna_services: Optional[Dict[str, KnowledgeBaseEndpoint]] = None):
        self._qna_services = MappingProxyType(dict(qna_services or {}))

    @property
    def qna_services(self) -> Mapping[str, KnowledgeBaseEndpoint]:
        return self._qna_services

    @classmethod
    def from_config(cls, settings: Optional[Config] = None) -> "BotServices":
        """Build services from settings, preferring a `.bot` file when one is configured."""
        settings = settings or default_config
        qna = settings.qna

        if qna.bot_file_path:
            return cls.from_bot_file(qna.bot_file_path)

        if not qna.is_configured:
            logger.warning("QnA Maker settings are incomplete; no knowledge base registered")
            return cls()

        endpoint = KnowledgeBaseEndpoint(
            knowledge_base_id=qna.knowledge_base_id,
            endpoint_key=qna.endpoint_key,
            host=qna.host,
        )
        logger.info(f"Registered QnA service '{qna.service_name}' ({qna.knowledge_base_id})")
        return cls({qna.service_name: endpoint})

    @classmethod
    def from_bot_file(cls, path: str) -> "BotServices":
        """
        Build services from a `.bot` configuration file.

        Only services of type "qna" are registered; other service types are ignored.
        """
        try:
            with open(path, encoding="utf-8") as f:
                bot_file = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Unable to read bot file '{path}': {e}") from e

        if not isinstance(bot_file, dict):
            raise ConfigurationError(f"Bot file '{path}' must contain a JSON object")

        qna_services = {}
        for service in bot_file.get("services") or []:
            if service.get("type") != ServiceType.QNA.value:
                continue
            name = service.get("name")
            if not name:
                raise ConfigurationError(f"Bot file '{path}' has a QnA service without a name")
            try:
                qna_services[name] = KnowledgeBaseEndpoint(
                    knowledge_base_id=service.get("kbId"),
                    endpoint_key=service.get("endpointKey"),
                    host=service.get("hostname"),
                )
            except ValidationError as e:
                raise ConfigurationError(
                    f"QnA service '{name}' in bot file '{path}' is missing required settings"
                ) from e
            logger.info(f"Registered QnA service '{name}' from {path}")

        return cls(qna_services)
