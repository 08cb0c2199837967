"""
Bot Framework integration for QnA Maker.
"""

import logging
from typing import List, Optional

from botbuilder.core import ActivityHandler, TurnContext
from botbuilder.schema import ActivityTypes, ChannelAccount

from .errors import ConfigurationError
from .qna_client import QnAMakerClient
from .services import BotServices

WELCOME_TEXT = "This bot will introduce you to QnA Maker. Type a greeting or question to get started"

NO_ANSWER_TEXT = (
    "No QnA Maker answers were found. This example uses a QnA Maker Knowledge Base "
    "that focuses on smart light bulbs. To see QnA Maker in action, ask the bot "
    "questions like 'Why won't it turn on?' or 'I need help'."
)


class QnABot(ActivityHandler):
    """
    Single-turn bot that answers messages from a QnA Maker knowledge base.

    Each turn is handled independently: a message is answered with the top
    knowledge base match, new members are welcomed, and any other activity
    is reported back by type. No conversation state is kept between turns.
    """

    # Name of the QnA service the bot queries
    QNA_MAKER_KEY = "QnABot"

    def __init__(self, services: BotServices, client: Optional[QnAMakerClient] = None):
        """
        Initialize the bot.

        Raises:
            ConfigurationError: No services were supplied, or none is named QNA_MAKER_KEY.
        """
        if services is None:
            raise ConfigurationError("Bot services are required")
        if self.QNA_MAKER_KEY not in services.qna_services:
            raise ConfigurationError(
                f"Invalid configuration. Please check your '.bot' file "
                f"for a QnA service named '{self.QNA_MAKER_KEY}'."
            )

        self.services = services
        self.client = client or QnAMakerClient()
        self.logger = logging.getLogger(__name__)

    async def on_turn(self, turn_context: TurnContext):
        """Dispatch a turn by activity type."""
        activity = turn_context.activity if turn_context else None
        if activity is None or not activity.type or activity.type in (
            ActivityTypes.message,
            ActivityTypes.conversation_update,
        ):
            return await super().on_turn(turn_context)

        # Activity types may arrive as enum members or raw strings
        activity_type = getattr(activity.type, "value", activity.type)
        await turn_context.send_activity(f"{activity_type} event detected")

    async def on_message_activity(self, turn_context: TurnContext):
        """Answer the message with the top knowledge base match."""
        text = turn_context.activity.text
        self.logger.info(f"Received message: {text}")

        endpoint = self.services.qna_services[self.QNA_MAKER_KEY]
        response = await self.client.get_answers(endpoint, text)

        if response:
            await turn_context.send_activity(response[0].answer)
        else:
            self.logger.info("No QnA Maker answers were found")
            await turn_context.send_activity(NO_ANSWER_TEXT)

    async def on_members_added_activity(
        self, members_added: List[ChannelAccount], turn_context: TurnContext
    ):
        """Welcome every added member except the bot itself."""
        for member in members_added:
            if member.id != turn_context.activity.recipient.id:
                await turn_context.send_activity(
                    f"Welcome to QnaBot {member.name}. {WELCOME_TEXT}"
                )
