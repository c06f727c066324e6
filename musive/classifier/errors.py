"""Error types for the classifier."""


class ClassificationError(Exception):
    """The judge's answer for one candidate could not be used.

    Raised while interpreting a response and always recovered inside
    ``RelevanceClassifier.classify``; the candidate is then rejected.
    """
