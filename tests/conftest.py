"""
Shared fixtures for QnA bot tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from botbuilder.schema import Activity, ActivityTypes, ChannelAccount, ConversationAccount

from qna_bot.config import Config, QnAConfig
from qna_bot.models import KnowledgeBaseEndpoint
from qna_bot.services import BotServices


BOT_ID = "bot1"


@pytest.fixture
def endpoint():
    """Knowledge base used by the light bulb sample."""
    return KnowledgeBaseEndpoint(
        knowledge_base_id="kb-light-bulbs",
        endpoint_key="test-endpoint-key",
        host="https://qna-test.azurewebsites.net/qnamaker",
    )


@pytest.fixture
def services(endpoint):
    return BotServices({"QnABot": endpoint})


@pytest.fixture
def qna_client():
    """QnA client whose lookups return no answers unless configured otherwise."""
    client = MagicMock()
    client.get_answers = AsyncMock(return_value=[])
    client.close = AsyncMock()
    return client


@pytest.fixture
def settings():
    return Config(
        qna=QnAConfig(
            knowledge_base_id="kb-light-bulbs",
            endpoint_key="test-endpoint-key",
            host="https://qna-test.azurewebsites.net/qnamaker",
        )
    )


def make_activity(activity_type, **kwargs) -> Activity:
    return Activity(
        type=activity_type,
        id="activity-1",
        channel_id="test",
        conversation=ConversationAccount(id="conversation-1"),
        from_property=ChannelAccount(id="user1", name="Alice"),
        recipient=ChannelAccount(id=BOT_ID, name="Bot"),
        **kwargs
    )


def make_turn_context(activity: Activity):
    """Turn context that records sent activities instead of delivering them."""
    context = MagicMock()
    context.activity = activity
    context.send_activity = AsyncMock()
    return context


def sent_texts(context):
    return [call.args[0] for call in context.send_activity.await_args_list]


@pytest.fixture
def message_context():
    def _make(text):
        return make_turn_context(make_activity(ActivityTypes.message, text=text))
    return _make
