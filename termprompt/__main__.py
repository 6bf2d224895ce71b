import os
import sys

# Enable importing also if not installed
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


from termprompt._cli import cli  # noqa: E402


if __name__ == "__main__":
    sys.exit(cli())
