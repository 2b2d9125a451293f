# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast subcommands (one module per command)."""
