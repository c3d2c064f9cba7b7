import logging
import shutil
import tempfile

from dicestack.config import Config
from dicestack.rng import SequenceSource


class ListHandler(logging.Handler):
    """
    Collects log records emitted during a scenario.
    """
    def __init__(self):
        super(ListHandler, self).__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def messages(self, level=logging.WARNING):
        return [r.getMessage() for r in self.records if r.levelno >= level]


def before_scenario(context, scenario):
    """
    Give every scenario a predictable random source, its own configuration
    and a place to collect log output.

    :type context: behave.runner.Context
    :type scenario: behave.model.Scenario
    """
    context.source = SequenceSource()
    context.dice_config = Config()
    context.error = None
    context.events = []
    context.tmpdir = tempfile.mkdtemp(prefix='dicestack-')
    context.log_handler = ListHandler()
    logger = logging.getLogger('dicestack')
    logger.addHandler(context.log_handler)
    logger.setLevel(logging.DEBUG)


def after_scenario(context, scenario):
    """
    :type context: behave.runner.Context
    :type scenario: behave.model.Scenario
    """
    logging.getLogger('dicestack').removeHandler(context.log_handler)
    shutil.rmtree(context.tmpdir, ignore_errors=True)
