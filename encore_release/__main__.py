import sys

from encore_release.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
