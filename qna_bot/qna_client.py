"""
QnA Maker client for knowledge base lookups.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from .config import config
from .errors import QnAServiceError
from .models import KnowledgeBaseEndpoint, QnAMakerOptions, QueryResult


class QnAMakerClient:
    """Client for the QnA Maker generateAnswer runtime API."""

    def __init__(
        self,
        options: Optional[QnAMakerOptions] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client with query options and an optional shared session."""
        self.options = options or QnAMakerOptions(
            top=config.qna.top,
            score_threshold=config.qna.score_threshold,
            timeout=config.qna.timeout,
        )
        self._session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(__name__)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def get_answers(
        self,
        endpoint: KnowledgeBaseEndpoint,
        question: Optional[str],
        options: Optional[QnAMakerOptions] = None,
    ) -> List[QueryResult]:
        """
        Query a knowledge base for answers to a question.

        Args:
            endpoint: The knowledge base to query
            question: The user's utterance
            options: Overrides the client's default query options

        Returns:
            List[QueryResult]: Matching answers, best first. Empty when nothing matched.

        Raises:
            QnAServiceError: The service could not be reached or returned an error.
        """
        if not question or not question.strip():
            return []

        options = options or self.options
        body = {
            "question": question,
            "top": options.top,
            "scoreThreshold": options.score_threshold * 100,
        }
        headers = {
            "Authorization": f"EndpointKey {endpoint.endpoint_key}",
            "Content-Type": "application/json",
        }

        self.logger.debug(f"Querying knowledge base {endpoint.knowledge_base_id}: {question}")

        session = self._get_session()
        try:
            async with session.post(
                endpoint.generate_answer_url,
                json=body,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=options.timeout),
            ) as response:
                if response.status >= 400:
                    text = await response.text()
                    raise QnAServiceError(
                        f"QnA Maker returned HTTP {response.status} for knowledge base "
                        f"{endpoint.knowledge_base_id}",
                        status=response.status,
                        body=text,
                    )
                payload = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise QnAServiceError(
                f"QnA Maker request timed out after {options.timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise QnAServiceError(f"QnA Maker request failed: {e}") from e
        except ValueError as e:
            raise QnAServiceError(f"QnA Maker returned an invalid response: {e}") from e

        results = self._parse_answers(payload, options.score_threshold)
        self.logger.debug(
            f"Knowledge base {endpoint.knowledge_base_id} returned {len(results)} answer(s)"
        )
        return results

    def _parse_answers(self, payload: Any, score_threshold: float) -> List[QueryResult]:
        """Convert a generateAnswer payload into ranked results."""
        if not isinstance(payload, dict):
            raise QnAServiceError("QnA Maker returned an unexpected response body")

        results = []
        for answer in payload.get("answers") or []:
            score = float(answer.get("score") or 0) / 100
            # The service reports "no good match" as a single zero-score answer
            if score <= 0 or score < score_threshold:
                continue
            results.append(
                QueryResult(
                    answer=answer.get("answer", ""),
                    score=score,
                    questions=answer.get("questions") or [],
                    source=answer.get("source"),
                    id=answer.get("id"),
                    metadata=self._parse_metadata(answer.get("metadata")),
                )
            )

        results.sort(key=lambda result: result.score, reverse=True)
        return results

    @staticmethod
    def _parse_metadata(metadata: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
        if not metadata:
            return {}
        return {item["name"]: item.get("value", "") for item in metadata if "name" in item}
