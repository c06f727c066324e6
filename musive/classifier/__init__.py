"""Relevance classification of feed candidates."""

from musive.classifier.client import RelevanceClassifier
from musive.classifier.errors import ClassificationError
from musive.classifier.models import ClassificationResult


__all__ = ["ClassificationError", "ClassificationResult", "RelevanceClassifier"]
