"""Constants for the ranker module."""

# Number of items delivered in one digest
DEFAULT_DIGEST_SIZE: int = 15

# Interest level assumed for items the classifier did not score
MISSING_INTEREST_LEVEL: int = 0
