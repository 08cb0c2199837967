"""
aiohttp host for the QnA bot.

Run locally with `python -m qna_bot.app` and connect the Bot Framework
Emulator to http://localhost:3978/api/messages.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from aiohttp import web
from botbuilder.core import BotFrameworkAdapter, BotFrameworkAdapterSettings, TurnContext
from botbuilder.schema import Activity, ActivityTypes

from .bot import QnABot
from .config import Config, config as default_config
from .errors import ConfigurationError
from .qna_client import QnAMakerClient
from .services import BotServices

logger = logging.getLogger(__name__)

ADAPTER_KEY = web.AppKey("adapter", BotFrameworkAdapter)
BOT_KEY = web.AppKey("bot", QnABot)

ERROR_TEXT = "Sorry, it looks like something went wrong."


async def on_turn_error(context: TurnContext, error: Exception):
    """Report an unhandled turn error to the user and, in the emulator, as a trace."""
    logger.error(f"Unhandled error during turn: {error}", exc_info=error)

    await context.send_activity(ERROR_TEXT)

    if context.activity.channel_id == "emulator":
        trace_activity = Activity(
            label="TurnError",
            name="on_turn_error Trace",
            timestamp=datetime.now(timezone.utc),
            type=ActivityTypes.trace,
            value=f"{error}",
            value_type="https://www.botframework.com/schemas/error",
        )
        await context.send_activity(trace_activity)


async def messages(request: web.Request) -> web.Response:
    """Receive an activity from the channel and run it through the bot."""
    if "application/json" not in (request.headers.get("Content-Type") or ""):
        return web.Response(status=415, text="Content-Type must be application/json")

    body = await request.json()
    activity = Activity().deserialize(body)
    auth_header = request.headers.get("Authorization", "")

    adapter = request.app[ADAPTER_KEY]
    bot = request.app[BOT_KEY]
    response = await adapter.process_activity(activity, auth_header, bot.on_turn)
    if response:
        return web.json_response(data=response.body, status=response.status)
    return web.Response(status=201)


async def health(request: web.Request) -> web.Response:
    return web.Response(text="QnA bot is running.")


def create_app(
    settings: Optional[Config] = None,
    client: Optional[QnAMakerClient] = None,
) -> web.Application:
    """
    Build the web application.

    The bot is constructed here so that a missing knowledge base fails at
    startup instead of on the first message.

    Raises:
        ConfigurationError: The QnA service is not configured.
    """
    settings = settings or default_config
    client = client or QnAMakerClient()

    services = BotServices.from_config(settings)
    bot = QnABot(services, client)

    adapter = BotFrameworkAdapter(
        BotFrameworkAdapterSettings(settings.bot.app_id, settings.bot.app_password)
    )
    adapter.on_turn_error = on_turn_error

    app = web.Application()
    app[ADAPTER_KEY] = adapter
    app[BOT_KEY] = bot
    app.router.add_post("/api/messages", messages)
    app.router.add_get("/", health)

    async def close_client(_app: web.Application):
        await client.close()

    app.on_cleanup.append(close_client)
    return app


def main():
    logging.basicConfig(
        level=getattr(logging, default_config.monitoring.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        app = create_app()
    except ConfigurationError as e:
        logger.error(f"Refusing to start: {e}")
        sys.exit(1)

    web.run_app(app, host="0.0.0.0", port=default_config.bot.port)


if __name__ == "__main__":
    main()
