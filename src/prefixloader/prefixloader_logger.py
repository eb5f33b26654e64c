"""
Logger for prefixloader. Emits one JSON line per event.
"""

import inspect
import logging
from datetime import datetime

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the prefixloader log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class PrefixLoaderLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "prefixloader") -> None:
        self.logger = logging.getLogger(name)

    def log(self, message: str, level: int) -> None:
        """
        Log the message at the given level, tagged with the caller's location
        """
        if not self.logger.isEnabledFor(level):
            return

        message = message.replace("\n", " ")

        # Collect details about the callee
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = calframe[1][1].split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=message,
        )

        self.logger.log(level=level, msg=log_line.model_dump_json())
