# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for KvCast."""
