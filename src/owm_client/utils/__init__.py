from owm_client.utils.logging_config import (
    ColoredFormatter,
    LogColors,
    configure_logging,
)

__all__ = [
    # Logging
    "LogColors",
    "ColoredFormatter",
    "configure_logging",
]
