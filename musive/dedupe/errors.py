"""Error types for deduplication."""


class DeduplicationError(Exception):
    """The dedupe judge's answer could not be used.

    Always recovered inside ``NewsDeduplicator.dedupe``, which then
    returns its input unchanged.
    """
