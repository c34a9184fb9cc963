"""Exceptions raised while harvesting exhibits."""

from __future__ import annotations


class HarvestError(Exception):
    """Base class for every harvesting failure."""


class DocumentError(HarvestError):
    """A failure confined to a single document; the batch carries on."""


class MissingScriptError(DocumentError):
    pass


class AmbiguousScriptError(DocumentError):
    pass


class ExtractionError(DocumentError):
    pass


class UnsupportedNodeError(ExtractionError):
    """Raised when a syntax node falls outside the shapes we can serialize."""

    def __init__(self, node_type: str, context: str = "") -> None:
        self.node_type = node_type
        message = f"unsupported syntax node: {node_type}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class MissingImagesError(DocumentError):
    pass


class MissingImagePathError(DocumentError):
    pass


class FetchError(DocumentError):
    pass


class BatchError(HarvestError):
    """A data-integrity violation that aborts the whole run."""


class DuplicateStoryNameError(BatchError):
    def __init__(self, collection: str | None, name: str) -> None:
        self.collection = collection
        self.name = name
        super().__init__(f"duplicate story name: {name} (collection {collection})")


class UnsupportedDialectError(BatchError):
    pass
