# compseq/paths.py

from pathlib import Path


# Directory holding run_compseq.py and the compseq package
REPO_ROOT = Path(__file__).resolve().parent.parent

# Log files written with --log_filename end up here unless a log_dir is given
LOG_DIR = REPO_ROOT / "logs"
