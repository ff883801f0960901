# extfix/config.py

# --- Output ---
# Default file name of the archive written at the end of a run.
DEFAULT_ARCHIVE_NAME = "fixed_images.zip"

# --- Display ---
# Number of most recent outcomes kept for live display. The full outcome log is never capped.
LOG_HISTORY_LIMIT = 500

# --- Filtering ---
# Path segments starting with one of these are excluded before the pipeline runs.
# Dotfiles and macOS resource-fork folders.
SKIP_PREFIXES = (".", "__MACOSX")

# --- Errors ---
# Message shown to the user when a run fails as a whole.
GENERIC_ERROR_MESSAGE = "An error occurred while processing files. Please try again."
