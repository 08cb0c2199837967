"""
Data models for knowledge base lookups.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ServiceType(str, Enum):
    """Service types found in a `.bot` configuration file."""

    QNA = "qna"
    LUIS = "luis"
    DISPATCH = "dispatch"
    ENDPOINT = "endpoint"
    APP_INSIGHTS = "appInsights"
    GENERIC = "generic"


class KnowledgeBaseEndpoint(BaseModel):
    """Connection details for one published QnA Maker knowledge base."""

    model_config = ConfigDict(frozen=True)

    knowledge_base_id: str
    endpoint_key: str = Field(..., repr=False)
    host: str

    @property
    def generate_answer_url(self) -> str:
        return f"{self.host.rstrip('/')}/knowledgebases/{self.knowledge_base_id}/generateAnswer"


class QnAMakerOptions(BaseModel):
    """Query options sent with each lookup."""

    top: int = Field(1, ge=1)
    score_threshold: float = Field(0.3, ge=0.0, le=1.0)
    timeout: float = Field(100.0, gt=0)


class QueryResult(BaseModel):
    """One answer returned by the knowledge base."""

    answer: str
    score: float
    questions: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    id: Optional[int] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
