from ecoclean.core.models import SurvivorPolicy
from ecoclean.core.hasher import HASH_ALGORITHMS

POLICY_ALIASES = {
    "first-seen": SurvivorPolicy.FIRST_SEEN,
    "first": SurvivorPolicy.FIRST_SEEN,
    "shortest-path": SurvivorPolicy.SHORTEST_PATH,
    "newest": SurvivorPolicy.NEWEST,
    "oldest": SurvivorPolicy.OLDEST,
}

POLICY_CHOICES = list(POLICY_ALIASES.keys())

POLICY_HELP_TEXT = (
    "Which copy of a duplicate group is kept:\n"
    "  first-seen    : first file found, i.e. the alphabetically first path (default)\n"
    "  shortest-path : file closest to the scanned root\n"
    "  newest        : most recently modified file\n"
    "  oldest        : least recently modified file\n"
)

ALGORITHM_CHOICES = list(HASH_ALGORITHMS.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash used to detect duplicates:\n"
    "  sha256  : SHA-256 (default)\n"
    "  blake2b : BLAKE2b-512\n"
    "  sha1    : SHA-1\n"
    "  md5     : MD5, same digests as md5sum (legacy)\n"
    "  xxh128  : xxHash 128-bit, fastest, not cryptographic\n"
)

EPILOG_TEXT = """
Configuration (optional, ./ecoclean.conf or --config):
  TEMP_EXTENSIONS="*.tmp *.log *.bak"
  CLEAN_DIRS="/path/one /path/two"
  LOG_FILE="~/.ecoclean/ecoclean.log"

Examples:
  Interactive menu for the current directory (or the configured CLEAN_DIRS)
  %(prog)s

  Interactive menu for one directory
  %(prog)s ~/projects/build

  List temporary files and exit
  %(prog)s ~/projects/build --list

  Delete duplicate temporary files without asking (for scripts)
  %(prog)s ~/projects/build --dedup --force

  Delete every temporary file, moving them to the trash instead of erasing them
  %(prog)s ~/projects/build --clean --trash
"""
