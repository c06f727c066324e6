"""Prompt templates for duplicate-event detection."""

import json

from musive.data_model.news import NewsItem


SYSTEM_INSTRUCTION = (
    "You are the editor of a daily music news digest. You receive a JSON "
    "array of news items collected from several outlets. Each item has an "
    '"index" field giving its position in the array.\n\n'
    "Find items that cover the SAME underlying event, for example the same "
    "album announcement, the same tour announcement, or the same award "
    "result reported by different outlets. Items about the same artist but "
    "DIFFERENT events are NOT duplicates.\n\n"
    "For each group of duplicates keep exactly one item and remove the "
    "others. Choose the survivor as follows:\n"
    '1. Prefer an item with a non-empty "thumbnail".\n'
    '2. Among those, prefer the item with the higher "interestLevel".\n\n'
    'Respond ONLY with a JSON object: {"indicesToRemove": [<index>, ...]}. '
    'Use {"indicesToRemove": []} when there are no duplicates.'
)


def build_dedupe_prompt(items: list[NewsItem]) -> str:
    """Serialize the full item list for the judge.

    Args:
        items: Items in pipeline order; each record carries its index.

    Returns:
        Prompt text.
    """
    records = [item.to_judge_record(index) for index, item in enumerate(items)]
    return json.dumps(records, ensure_ascii=False, indent=1)
