"""Application configuration driven by environment variables.

All settings have sensible defaults for local use.
"""

import os

# ---------------------------------------------------------------------------
# Local persistence
# ---------------------------------------------------------------------------

# Directory holding one JSON file per storage key.
STORAGE_DIR: str = os.getenv("MOODFEED_STORAGE_DIR", "~/.moodfeed")

# Namespace for the preference and mood signal keys.  Changing it starts the
# user from a clean slate without deleting the old data.
KEY_PREFIX: str = os.getenv("MOODFEED_KEY_PREFIX", "nuera")

# ---------------------------------------------------------------------------
# Card catalogue
# ---------------------------------------------------------------------------

# JSON deck to rank instead of the built-in seed cards.  Empty = seed deck.
CATALOGUE_PATH: str = os.getenv("MOODFEED_CATALOGUE_PATH", "")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL: str = os.getenv("MOODFEED_LOG_LEVEL", "WARNING")
