from typing import Annotated as A, Optional
import functools, sys
from loguru import logger
from pydantic import StringConstraints
from pydantic_settings import BaseSettings, SettingsConfigDict

# Libraries shouldn't log unless the application asks for it, see configure_logging
logger.disable("iso_duration")


class CodecSettings(BaseSettings):
    log_level: A[str, StringConstraints(to_upper=True)] = "INFO"

    log_rejected_values: bool = False
    """ Log a warning with the value whenever a duration field fails to validate """

    model_config = SettingsConfigDict(
        frozen = True,
        env_prefix = 'ISO_DURATION_',
    )


@functools.cache
def get_settings():
    return CodecSettings()


def configure_logging(settings: Optional[CodecSettings] = None) -> int:
    """
    Enable logging from this package to stderr at `settings.log_level`.
    Returns the loguru handler id so the sink can be removed again.
    """
    settings = settings or get_settings()
    logger.enable("iso_duration")
    return logger.add(sys.stderr, level = settings.log_level,
        filter = lambda record: record["name"].startswith("iso_duration"),
    )
