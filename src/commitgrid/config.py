"""Default configuration values for commitgrid."""

from __future__ import annotations

from typing import Final

# Rows above and below the accessed row whose metadata is handed to the
# metadata cache as a batch-loading hint.
UP_PRELOAD_COUNT: Final[int] = 20
DOWN_PRELOAD_COUNT: Final[int] = 40

# Accessing any row this close to the end of the loaded window asks the
# upstream provider for more commits.
LOAD_MORE_THRESHOLD: Final[int] = DOWN_PRELOAD_COUNT

# ---------------------------------------------------------------------------
# Cache sizing
# ---------------------------------------------------------------------------

DETAILS_CACHE_SIZE: Final[int] = 1_000
METADATA_CACHE_SIZE: Final[int] = 20_000

# Upper bound for the number of ids a single background metadata batch loads.
# Hints beyond this are dropped; the next access re-issues them.
METADATA_BATCH_LIMIT: Final[int] = 100

# ---------------------------------------------------------------------------
# Upstream pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE: Final[int] = 1_000

# ---------------------------------------------------------------------------
# Placeholder rendering
# ---------------------------------------------------------------------------

LOADING_SUBJECT: Final[str] = "Loading…"
SHORT_HASH_LENGTH: Final[int] = 8
