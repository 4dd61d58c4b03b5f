import logging
import os
from logging.handlers import RotatingFileHandler

LEVELS = {
  "DEBUG": logging.DEBUG,
  "INFO": logging.INFO,
  "WARNING": logging.WARNING,
  "ERROR": logging.ERROR,
  "CRITICAL": logging.CRITICAL,
}

def setup_logging(level: int = None) -> None:
  if level is None:
    level = LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

  fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

  # LOG_FILE switches to a rotating file, otherwise stderr
  log_file = os.getenv("LOG_FILE")
  if log_file:
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(level=level, handlers=[handler])
  else:
    logging.basicConfig(format=fmt, level=level, datefmt="%Y-%m-%d %H:%M:%S")

  # per-frame chatter from the socket library
  logging.getLogger("websockets").setLevel(max(level, logging.WARNING))

def get_logger(name: str) -> logging.Logger:
  return logging.getLogger(f"pricefeed.{name}")
