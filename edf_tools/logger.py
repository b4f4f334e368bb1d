""" Logging for the EDF tools.

	Every module logs through the 'edf_tools' logger, a stream handler with
	level colored messages is attached the first time it is requested.
"""

import logging
import sys

FORMAT = "%(asctime)s [%(levelname)s] [%(name)s/%(filename)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ANSI color per level, WARNING and above stand out
LEVEL_COLORS = {
	logging.DEBUG: "\x1b[36;20m",
	logging.INFO: "\x1b[32;20m",
	logging.WARNING: "\x1b[33;20m",
	logging.ERROR: "\x1b[31;20m",
	logging.CRITICAL: "\x1b[31;1m",
}
RESET = "\x1b[0m"


class ColorFormatter(logging.Formatter):

	def __init__(self):
		super(ColorFormatter, self).__init__(FORMAT, DATE_FORMAT)
		self._formatters = dict(
			(level, logging.Formatter(color + FORMAT + RESET, DATE_FORMAT))
			for level, color in LEVEL_COLORS.items()
		)

	def format(self, record):
		formatter = self._formatters.get(record.levelno)
		if formatter is None:
			return super(ColorFormatter, self).format(record)
		return formatter.format(record)


def get_logger(name = "edf_tools"):
	""" Return the named logger, attaching the colored stdout handler if
		it has no handlers yet.
	"""
	logger = logging.getLogger(name)

	if not logger.handlers:
		logger.setLevel(logging.INFO)
		handler = logging.StreamHandler(sys.stdout)
		handler.setFormatter(ColorFormatter())
		logger.addHandler(handler)

	return logger


logger = get_logger()


def set_log_level(level):
	""" param level: logging.DEBUG, logging.INFO, ... or "DEBUG", "info", ... """
	if isinstance(level, str):
		level = getattr(logging, level.upper())
	logger.setLevel(level)
