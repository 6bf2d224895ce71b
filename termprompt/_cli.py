import sys

from . import config
from .errors import Cancelled
from .styles import style
from .term import probe
from .utils import enable_log_forwarding, listen_to_logs


USAGE = """usage: termprompt [--version] [--listen] [--log] [demo]

  --version  print the version and exit
  --listen   print the logs of termprompt sessions in other processes
  --log      forward the logs of this process to the listener
  demo       run one prompt of each kind
"""


def demo():
    """Run one prompt of each kind, and print the results."""
    from . import session, validators

    tier = probe().color_tier
    try:
        name = session.ask("What is your name?", validator=validators.non_empty())
        age = session.ask_int("How old are you?", check=lambda x: 0 <= x < 150)
        color = session.select(
            "Favourite color?", ["red", "green", "blue"], default="green"
        )
        extras = session.multiselect(
            "Toppings?", [("Cheese", "cheese"), ("Olives", "olives"), ("Ham", "ham")]
        )
        ok = session.confirm("Is this correct?", default=True)
    except Cancelled:
        print(style("Cancelled", "dim", tier))
        return 1

    print(style("Result:", "bold", tier), name, age, color, extras, ok)
    return 0


def cli(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    config.load_defaults()

    if "--version" in argv or "version" in argv:
        from . import __version__

        print("termprompt", __version__)
        return 0
    elif "--listen" in argv:
        listen_to_logs()
        return 0

    if "--log" in argv:
        enable_log_forwarding()

    if "demo" in argv:
        return demo()

    print(USAGE)
    return 0
