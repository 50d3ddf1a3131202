from aiohttp import web
from launart import Launart, Service
from loguru import logger

from func.tool.mcping.exceptions import StatusPingError
from func.tool.mcping.mcping import format_status, get_server_status
from models.command import CommandContext, SlackMessage
from utils.command import dispatch

CONTEXT_KEY = web.AppKey("context", CommandContext)


async def handle_report(request: web.Request) -> web.Response:
    ctx = request.app[CONTEXT_KEY]
    try:
        status = await get_server_status(ctx)
    except StatusPingError as e:
        logger.warning(f"[Service.webhook] Status report failed: {type(e).__name__}: {e}")
        return web.Response(text=str(e), status=500)
    return web.Response(text=format_status(status))


async def handle_webhook(request: web.Request) -> web.Response:
    ctx = request.app[CONTEXT_KEY]
    form = await request.post()
    msg = SlackMessage.from_form({key: str(value) for key, value in form.items()})
    logger.debug(f"[Service.webhook] {msg}")

    try:
        text = await dispatch(msg, ctx)
    except StatusPingError as e:
        logger.warning(f"[Service.webhook] Command {msg.text!r} failed: {type(e).__name__}: {e}")
        text = f"Oops: {e}"
    except Exception as e:
        logger.exception(f"[Service.webhook] Command {msg.text!r} crashed")
        text = f"Oops: {e}"

    return web.json_response({"text": text}, content_type="text/json")


def create_app(ctx: CommandContext, path: str = "/jack/") -> web.Application:
    app = web.Application()
    app[CONTEXT_KEY] = ctx
    app.router.add_get(path, handle_report)
    app.router.add_post(path, handle_webhook)
    return app


class WebhookService(Service):
    id: str = "minestatus/webhook"

    runner: web.AppRunner

    def __init__(self, ctx: CommandContext, host: str = "0.0.0.0", port: int = 8080, path: str = "/jack/") -> None:  # noqa: S104
        super().__init__()
        self.ctx = ctx
        self.host = host
        self.port = port
        self.path = path

    @property
    def required(self) -> set[str]:
        return set()

    @property
    def stages(self) -> set[str]:
        return {"preparing", "blocking", "cleanup"}

    async def launch(self, manager: Launart) -> None:
        async with self.stage("preparing"):
            self.runner = web.AppRunner(create_app(self.ctx, self.path))
            await self.runner.setup()
            site = web.TCPSite(self.runner, self.host, self.port)
            await site.start()
            logger.success(f"[Service.webhook] Listening on http://{self.host}:{self.port}{self.path}")

        async with self.stage("blocking"):
            await manager.status.wait_for_sigexit()

        async with self.stage("cleanup"):
            await self.runner.cleanup()
            logger.info("[Service.webhook] Webhook server stopped")
