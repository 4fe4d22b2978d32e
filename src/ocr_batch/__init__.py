"""
Batch image-to-text OCR package.

Queue images with `ItemQueue`, recognize them sequentially with `BatchRunner`
and render the collected results into a paginated PDF with `DocumentComposer`.
"""

from .batch import BatchRunner, ItemQueue, ItemStatus, ResultAggregator
from .document import DocumentComposer
from .pipeline import BatchOCRPipeline
from .schema import ResultEntry

__all__ = [
    "BatchOCRPipeline",
    "BatchRunner",
    "DocumentComposer",
    "ItemQueue",
    "ItemStatus",
    "ResultAggregator",
    "ResultEntry",
]
