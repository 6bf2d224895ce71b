"""
termprompt - styled terminal output and interactive prompts.
"""

from .errors import AlreadyActive, Cancelled, StreamClosed, TermPromptError  # noqa
from .styles import style, strip_styles  # noqa
from .formatting import box, rule, indent  # noqa
from .validators import Ok, Reject  # noqa
from .prompt import Choice, PromptSpec  # noqa
from .session import (  # noqa
    ask_prompt,
    ask,
    ask_int,
    ask_pattern,
    ask_mapped,
    confirm,
    select,
    multiselect,
)
from ._cli import cli  # noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))
