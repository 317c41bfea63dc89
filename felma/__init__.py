# Felma Shared Module
# Common functions used across all Felma apps

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    CORS_ORIGIN,
    VALID_ITEM_TYPES
)

from .errors import (
    ItemNotFound,
    StoreError
)

from .helpers import (
    configure_logging,
    strip_markdown_json,
    collapse_whitespace,
    display_title
)

from .ranking import (
    DEFAULT_RANKING,
    RankingConfig,
    RankingResult,
    RatingInput,
    RatingValidationError,
    compute_rank,
    parse_ratings
)

from .stages import (
    STAGES,
    StageError
)

from .store import (
    SORT_OPTIONS,
    backend_name,
    list_items,
    get_item,
    get_profile,
    create_item,
    update_ratings,
    advance_item
)
