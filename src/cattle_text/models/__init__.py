"""Pydantic v2 models for parsed report documents.

Re-exports all model classes for convenient import::

    from cattle_text.models import Dataset, MetricRecord, ...
"""

from .dataset import Dataset, MetricRecord, StateBucket
from .document import Document
from .template import TemplateRecord, TemplateSet

__all__ = [
    "Document",
    "Dataset",
    "MetricRecord",
    "StateBucket",
    "TemplateRecord",
    "TemplateSet",
]
