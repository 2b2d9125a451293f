# topmark:header:start
#
#   project      : KvCast
#   file         : __main__.py
#   file_relpath : src/kvcast/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m kvcast``."""

from kvcast.cli.main import cli

if __name__ == "__main__":
    cli()
