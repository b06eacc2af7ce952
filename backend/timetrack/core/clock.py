from datetime import date, datetime
from zoneinfo import ZoneInfo

from timetrack.core.config import settings


def get_today() -> date:
    """Current calendar day in the configured zone.

    Used as a FastAPI dependency so tests can pin "today".
    """
    return datetime.now(ZoneInfo(settings.timezone)).date()
