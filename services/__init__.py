from .probe import DebugProbeService
from .webhook import WebhookService, create_app

__all__ = ["DebugProbeService", "WebhookService", "create_app"]
