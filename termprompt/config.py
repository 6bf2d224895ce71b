"""
Tunable defaults.

These are plain module attributes, so they can be changed at runtime, e.g.
``termprompt.config.RULE_WIDTH = 100``. Call ``load_defaults()`` to pick up
overrides from the environment.
"""

import os

# Seconds to wait for the rest of an escape sequence before treating a
# lone ESC as the Escape key.
ESCAPE_TIMEOUT = 0.05

# Max chars buffered while matching an escape sequence.
MAX_ESCAPE_LENGTH = 16

RULE_WIDTH = 80
INDENT_UNIT = "  "
BOX_STYLE = "unicode"

# Language of the messages shown to the user, see messages.py
LOCALE = "en"

# UDP port used to forward log records, see utils.py
LOG_PORT = 12013


_ENV_KEYS = {
    "TERMPROMPT_ESCAPE_TIMEOUT": ("ESCAPE_TIMEOUT", float),
    "TERMPROMPT_RULE_WIDTH": ("RULE_WIDTH", int),
    "TERMPROMPT_INDENT_UNIT": ("INDENT_UNIT", str),
    "TERMPROMPT_BOX_STYLE": ("BOX_STYLE", str),
    "TERMPROMPT_LOCALE": ("LOCALE", str),
    "TERMPROMPT_LOG_PORT": ("LOG_PORT", int),
}


def load_defaults(environ=None):
    """Override the defaults in this module from environment variables.

    Unset variables leave the corresponding default untouched. A value
    that cannot be converted raises ValueError.
    """
    environ = os.environ if environ is None else environ
    namespace = globals()
    for env_key, (name, convert) in _ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is None:
            continue
        try:
            value = convert(raw)
        except ValueError:
            raise ValueError(f"Invalid value for {env_key}: {raw!r}") from None
        if convert is int and value <= 0:
            raise ValueError(f"{env_key} must be > 0, got {value}")
        if name in ("INDENT_UNIT", "LOCALE") and not value:
            raise ValueError(f"{env_key} cannot be empty")
        namespace[name] = value
