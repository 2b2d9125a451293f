# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic building blocks shared across KvCast (enums, exit codes, formats)."""
