import os
import traceback
from enum import Enum
from logging import getLogger

logger = getLogger("fluent_webtest")

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Tag(Enum):
    """
    The kind of action being logged. Each tag renders either as an icon or,
    when the caller asked for plain output, as a bracketed four-letter code.
    """

    OPEN = ("🌐", "OPEN")
    BACK = ("⬅️", "BACK")
    FORWARD = ("➡️", "FRWD")
    REFRESH = ("🔄", "RFSH")
    MESSAGE = ("📝", "MESG")
    DELAY = ("⏳", "DELY")
    WAIT = ("⏳", "WAIT")
    ERROR = ("😳", "EROR")
    ELEMENT = ("🔍", "ELMT")
    ELEMENTS = ("🔍", "ELMS")
    TYPE = ("⌨", "TYPE")
    CLICK = ("👆", "CLIK")
    CLEAR = ("🧹", "CLER")
    SELECT = ("📌", "SLCT")
    PARENT = ("⬆", "PART")
    CHILDREN = ("👶", "CHLD")

    def label(self, ascii: bool) -> str:
        icon, code = self.value
        return f"[{code}]" if ascii else icon


def caller_location() -> str:
    """
    Returns ' (file.py:42)' for the closest frame outside this package, or an
    empty string if there is none.
    """
    for frame in reversed(traceback.extract_stack()):
        if os.path.abspath(frame.filename).startswith(_PACKAGE_DIR + os.sep):
            continue
        if frame.filename and frame.lineno:
            return f" ({os.path.basename(frame.filename)}:{frame.lineno})"
        return ""
    return ""


def log_action(tag: Tag, ascii: bool, message: str):
    logger.info(f"{tag.label(ascii)} {message}{caller_location()}")


def log_error(tag: Tag, ascii: bool, message: str):
    logger.error(f"{tag.label(ascii)} {message}{caller_location()}")


def describe_seconds(seconds: float) -> str:
    if abs(seconds - 1.0) <= 0.0001:
        return "1 second"
    return f"{seconds:g} seconds"
