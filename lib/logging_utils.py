"""
Logging utilities for Skycast.

Configures root and named loggers from the [logging] config section.
Every handler masks the OpenWeatherMap `appid` query parameter, so request
URLs can be logged without leaking the API key.
"""
import logging
import re
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_BACKUP_COUNT = 7
HTTP_LOGGERS = ("httpx", "httpcore")

_APPID_RE = re.compile(r"(appid=)[^&\s\"']+")


class ApiKeyFilter(logging.Filter):
    """Replaces appid=<key> in log records with appid=***"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _APPID_RE.sub(r"\1***", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, levelStr.upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _createFileHandler(config: Dict[str, Any]) -> logging.Handler:
    logFile = config["file"]
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)

    if config.get("rotate", False):
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=int(config.get("backup-count", DEFAULT_BACKUP_COUNT)),
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings."""

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel
        # stderr keeps stdout clean for the JSON report
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel)
        consoleHandler.setFormatter(formatter)
        consoleHandler.addFilter(ApiKeyFilter())
        localLogger.addHandler(consoleHandler)
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        try:
            fileLogLevel = logLevel
            if "file-level" in config:
                fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel
            fileHandler = _createFileHandler(config)
            fileHandler.setLevel(fileLogLevel)
            fileHandler.setFormatter(formatter)
            fileHandler.addFilter(ApiKeyFilter())
            localLogger.addHandler(fileHandler)
            logger.info(f"Logging {localLogger.name} to file: {config['file']}, logLevel: {fileLogLevel}")
        except Exception as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")


def initLogging(config: Dict[str, Any]) -> None:
    """
    Configure logging from the [logging] config section

    Keys: level, format, console, console-level, file, file-level, rotate,
    backup-count, propagate, log-requests (keep httpx request logs) and a
    [logging.logger.<name>] table per named logger.
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # Every weather request would be logged by httpx otherwise
    if not config.get("log-requests", False) and logLevel < logging.WARNING:
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logConfigs = config.get("logger", {})
    for loggerName, loggerConfig in logConfigs.items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        localLogger = logging.getLogger(loggerName)
        configureLogger(localLogger, loggerConfig)

    logger.info(f"Logging configured: root level={logLevel}")
