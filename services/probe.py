from launart import Launart, Service
from loguru import logger

from func.tool.mcping.exceptions import StatusPingError
from func.tool.mcping.mcping import get_server_status
from func.tool.mcping.status import strip_formatting
from models.command import CommandContext


class DebugProbeService(Service):
    """调试模式下启动时立即查询一次服务器状态"""

    id: str = "minestatus/debug_probe"

    def __init__(self, ctx: CommandContext) -> None:
        super().__init__()
        self.ctx = ctx

    @property
    def required(self) -> set[str]:
        return set()

    @property
    def stages(self) -> set[str]:
        return {"preparing"}

    async def launch(self, _: Launart) -> None:
        async with self.stage("preparing"):
            logger.info(f"[Service.probe] Probing {self.ctx.address}...")
            try:
                status = await get_server_status(self.ctx)
            except StatusPingError as e:
                logger.error(f"[Service.probe] Probe failed: {type(e).__name__}: {e}")
                return
            logger.success(f"[Service.probe] {strip_formatting(status.motd).strip()} ({status.server_version})")
