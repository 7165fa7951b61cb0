"""
In-memory implementation of the document store.

Keeps collections in process memory for local development and tests.
Enforces unique indexes and evaluates the aggregation stages the service
uses ($lookup, $unwind, $project) with MongoDB semantics.
"""

import copy
from collections import defaultdict
from typing import Any, Dict, List, Optional, Set

import structlog

from ..domain.exceptions import DuplicateKeyException
from .document_store import Document, IDocumentStore

logger = structlog.get_logger(__name__)

_MISSING = object()


def _resolve_path(document: Document, path: str) -> Any:
    """Resolve a dotted field path, returning _MISSING when absent."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


class MemoryDocumentStore(IDocumentStore):
    """
    Dict-backed document store.

    Every operation completes without awaiting, so each one is atomic with
    respect to other requests on the same event loop. Documents are deep
    copied on write and on read; callers never share state with the store.

    Attributes:
        collections: Mapping of collection name to {_id: document}
        unique_indexes: Mapping of collection name to uniquely indexed fields
    """

    def __init__(self):
        self.collections: Dict[str, Dict[str, Document]] = defaultdict(dict)
        self.unique_indexes: Dict[str, Set[str]] = defaultdict(set)

        logger.info("Initialized MemoryDocumentStore")

    async def save(self, collection: str, document: Document) -> Document:
        documents = self.collections[collection]
        document_id = document["_id"]

        for field in self.unique_indexes[collection]:
            value = document.get(field)
            for other_id, other in documents.items():
                if other_id != document_id and other.get(field) == value:
                    logger.warning(
                        "Duplicate key on save",
                        collection=collection,
                        key=field,
                        document_id=document_id,
                    )
                    raise DuplicateKeyException(collection, field, value)

        documents[document_id] = copy.deepcopy(document)
        return copy.deepcopy(document)

    async def find_all(self, collection: str) -> List[Document]:
        return [copy.deepcopy(doc) for doc in self.collections[collection].values()]

    async def find_by_id(self, collection: str, document_id: str) -> Optional[Document]:
        document = self.collections[collection].get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def aggregate(
        self, collection: str, pipeline: List[Document]
    ) -> List[Document]:
        results = [copy.deepcopy(doc) for doc in self.collections[collection].values()]

        for stage in pipeline:
            if len(stage) != 1:
                raise ValueError(f"Pipeline stage must have exactly one operator: {stage}")
            operator, spec = next(iter(stage.items()))

            if operator == "$lookup":
                results = self._lookup(results, spec)
            elif operator == "$unwind":
                results = self._unwind(results, spec)
            elif operator == "$project":
                results = self._project(results, spec)
            else:
                raise ValueError(f"Unsupported pipeline stage: {operator}")

        return results

    async def ensure_unique_index(self, collection: str, field: str) -> None:
        seen: List[Any] = []
        for doc in self.collections[collection].values():
            value = doc.get(field)
            if value in seen:
                raise DuplicateKeyException(collection, field, value)
            seen.append(value)

        self.unique_indexes[collection].add(field)
        logger.info("Unique index ensured", collection=collection, field=field)

    async def ping(self) -> bool:
        return True

    # ========== Pipeline stages ==========

    def _lookup(self, documents: List[Document], spec: Document) -> List[Document]:
        """Left outer join; ``as`` always receives a (possibly empty) array."""
        foreign = list(self.collections[spec["from"]].values())
        local_field = spec["localField"]
        foreign_field = spec["foreignField"]

        for doc in documents:
            local_value = _resolve_path(doc, local_field)
            local_value = None if local_value is _MISSING else local_value
            matches = []
            for other in foreign:
                foreign_value = _resolve_path(other, foreign_field)
                foreign_value = None if foreign_value is _MISSING else foreign_value
                if foreign_value == local_value:
                    matches.append(copy.deepcopy(other))
            doc[spec["as"]] = matches

        return documents

    @staticmethod
    def _unwind(documents: List[Document], path: str) -> List[Document]:
        """One output document per array element; empty or missing arrays are dropped."""
        field = path.lstrip("$")

        unwound: List[Document] = []
        for doc in documents:
            value = _resolve_path(doc, field)
            if isinstance(value, list) and value:
                for element in value:
                    row = copy.deepcopy(doc)
                    row[field] = element
                    unwound.append(row)
            elif not isinstance(value, list) and value is not _MISSING and value is not None:
                # Non-array values pass through as a single element
                unwound.append(doc)

        return unwound

    @staticmethod
    def _project(documents: List[Document], spec: Document) -> List[Document]:
        """Inclusion/renaming projection. ``_id`` is kept unless set to 0."""
        projected: List[Document] = []
        for doc in documents:
            row: Document = {}
            if spec.get("_id", 1) and "_id" in doc:
                row["_id"] = doc["_id"]

            for name, expression in spec.items():
                if name == "_id":
                    continue
                if isinstance(expression, str) and expression.startswith("$"):
                    value = _resolve_path(doc, expression[1:])
                elif expression in (1, True):
                    value = _resolve_path(doc, name)
                else:
                    raise ValueError(f"Unsupported projection for '{name}': {expression}")
                if value is not _MISSING:
                    row[name] = value

            projected.append(row)

        return projected
