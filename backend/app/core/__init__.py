from app.core.config import Settings, get_settings, settings
from app.core.logging import AnalysisLogger, get_logger

__all__ = ["AnalysisLogger", "Settings", "get_logger", "get_settings", "settings"]
