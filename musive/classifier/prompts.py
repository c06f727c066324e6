"""Prompt templates for music news relevance classification."""

_SYSTEM_TEMPLATE = (
    "You are a strict music news curator. Filter and summarize articles "
    "using the criteria below.\n\n"
    "[Judgment criteria]\n"
    "- isValid = false: shopping, discounts, gift guides, simple gossip, "
    "politics, film or TV reviews, 'Best of' lists, advertorials and other "
    "promotional content, product reviews.\n"
    "- isValid = true: an artist's new album or song release, tour news, "
    "interviews, important music industry news, award show results.\n\n"
    "[Summary rules]\n"
    "- Write a summary ONLY when isValid is true.\n"
    "- Rate interestLevel (integer 1-100) ONLY when isValid is true. Rate "
    "news about current rookies and indie artists higher. Prefer hip-hop "
    "and R&B. Rate new songs, tours, and album news higher.\n"
    "- Write the summary in {language}, in a polite register.\n"
    "- Keep only the key facts, in 2-3 sentences.\n\n"
    "Respond ONLY with a JSON object with exactly these fields:\n"
    '{{"isValid": boolean, "summary": string, "interestLevel": number}}\n'
    'When isValid is false, use "summary": "" and "interestLevel": 0.'
)

_USER_TEMPLATE = "Title: {title}\nContent: {excerpt}"


def build_system_instruction(language: str = "Korean") -> str:
    """Build the fixed evaluation instructions.

    Args:
        language: Language the summary should be written in.

    Returns:
        System instruction text.
    """
    return _SYSTEM_TEMPLATE.format(language=language)


def build_classification_prompt(title: str, excerpt: str) -> str:
    """Build the per-candidate user prompt.

    Args:
        title: Candidate title.
        excerpt: Plain-text excerpt.

    Returns:
        Prompt text.
    """
    return _USER_TEMPLATE.format(title=title, excerpt=excerpt)
