import logging.config
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    # legacy env GRPC_ADDRESS, MILVUS_URI takes precedence
    GRPC_ADDRESS = str(os.getenv("GRPC_ADDRESS", "127.0.0.1:19530"))
    MILVUS_URI = str(os.getenv("MILVUS_URI", GRPC_ADDRESS))

    DEFAULT_DB_NAME = str(os.getenv("MILVUS_DB_NAME", "default"))

    # milliseconds subtracted from "now" for Bounded consistency
    GRACEFUL_TIME = int(os.getenv("MILVUS_GRACEFUL_TIME", "5000"))
    # seconds between two index build progress probes
    WAIT_INTERVAL = float(os.getenv("MILVUS_WAIT_INTERVAL", "0.5"))

    LOG_LEVEL = str(os.getenv("MILVUS_LOG_LEVEL", "WARNING")).upper()
    IndexName = ""


# logging
COLORS = {
    "HEADER": "\033[95m",
    "INFO": "\033[92m",
    "DEBUG": "\033[94m",
    "WARNING": "\033[93m",
    "ERROR": "\033[95m",
    "CRITICAL": "\033[91m",
    "ENDC": "\033[0m",
}


class ColorFulFormatColMixin:
    def format_col(self, message_str: str, level_name: str):
        if level_name in COLORS:
            message_str = COLORS.get(level_name) + message_str + COLORS.get("ENDC")
        return message_str


class ColorfulFormatter(logging.Formatter, ColorFulFormatColMixin):
    def format(self, record: logging.LogRecord):
        message_str = super().format(record)

        return self.format_col(message_str, level_name=record.levelname)


def init_log(log_level: str, colorful: bool = False):
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s [%(levelname)s][%(funcName)s]: %(message)s (%(filename)s:%(lineno)s)",
            },
            "colorful_console": {
                "format": "%(asctime)s | %(levelname)s: %(message)s (%(filename)s:%(lineno)s) (%(process)s)",
                "()": ColorfulFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "colorful_console",
            },
            "no_color_console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "milvus_marshal": {
                "handlers": ["console" if colorful else "no_color_console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }
    logging.config.dictConfig(logging_config)


init_log(Config.LOG_LEVEL)
