"""
The configuration store for dicestack. Any module can import this to interact
with the configuration.
"""
import configparser

DEFAULTS = """
[display]
inline = no
locale =
fraction digits = 2
stunt label = Stunt Points
"""


class Config(configparser.ConfigParser):
    """
    Custom config class that adds just a little sugar.
    """
    BOOLEAN_STATES = dict(configparser.ConfigParser.BOOLEAN_STATES,
                          enabled=True, disabled=False)

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('interpolation', None)
        configparser.ConfigParser.__init__(self, *args, **kwargs)
        self.read_string(DEFAULTS, '<defaults>')

    def getdefault(self, section, option, raw=False, vars=None, default=None):
        if self.has_option(section, option):
            return self.get(section, option, raw=raw, vars=vars)
        else:
            return default

    def section(self, section):
        if not self.has_section(section):
            raise configparser.NoSectionError(section)
        return self[section]

    def load(self, *paths):
        """
        Read configuration files over the defaults. Missing files are skipped.

        :return: The files that were read.
        :rtype: list
        """
        return self.read(paths)

    def reset(self):
        for section in self.sections():
            self.remove_section(section)
        self.read_string(DEFAULTS, '<defaults>')


config = Config()
