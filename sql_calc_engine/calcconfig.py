import configparser
import logging
import os


DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class CalcConfig:
    """
    class for the settings of the command line front-end.
    Values are read from the [sqlcalc] section of an ini file (path in SQLCALC_CONFIG, default ./config.ini)
    and can be overridden by the environment variables SQLCALC_LOG_LEVEL and SQLCALC_LOG_FORMAT.
    """

    section = "sqlcalc"

    def __init__(self, config_file: str | None = None):
        self.config_file = config_file or os.environ.get("SQLCALC_CONFIG", "config.ini")
        self.config = configparser.ConfigParser(interpolation=None)
        read_files = self.config.read(self.config_file)
        if read_files:
            logging.debug(f"CalcConfig read {read_files}")

    def _get(self, key: str, env_var: str, default: str) -> str:
        value = os.environ.get(env_var)
        if value:
            return value
        return self.config.get(self.section, key, fallback=default)

    def get_log_level(self) -> int:
        name = self._get("log_level", "SQLCALC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{name}' in configuration")
        return level

    def get_log_format(self) -> str:
        return self._get("log_format", "SQLCALC_LOG_FORMAT", DEFAULT_LOG_FORMAT)
