import logging
from logging.handlers import TimedRotatingFileHandler

from twisted.python import log

_observer = None


def open_log(filepath='dicestack.log', level=logging.INFO, stdout=False):
    global _observer
    logger = logging.getLogger()  # Root logger.
    logger.setLevel(level)
    if stdout:
        handler = logging.StreamHandler()
    else:
        handler = TimedRotatingFileHandler(filepath, when="midnight",
                                           backupCount=7)
    formatter = logging.Formatter('%(asctime)s %(name)s %(message)s',
                                  '%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # This directs twisted logs into the python log.
    if _observer is None:
        _observer = log.PythonLoggingObserver()
        _observer.start()
    return handler


def close_log(handler):
    global _observer
    logging.getLogger().removeHandler(handler)
    handler.close()
    if _observer is not None:
        _observer.stop()
        _observer = None
