"""Single-document content store for the current test definition."""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from examgate.config import CURRENT_DOCUMENT_ID, MAX_DOCUMENT_BYTES
from examgate.data.default_questions import build_default_test
from examgate.errors import MalformedDocument, PayloadTooLarge, StoreUnavailable
from examgate.models.db.content_document import ContentDocument
from examgate.models.questions import TestDefinition
from examgate.utils import json_dump, json_load

logger = logging.getLogger(__name__)

# Serializes probe + create/update within this process
_write_lock = threading.Lock()


def serialize_definition(definition: TestDefinition) -> str:
    """Serialize a definition to the stored document text."""
    return json_dump(definition.to_payload())


def deserialize_definition(data: str) -> TestDefinition:
    """Parse stored document text, accepting the legacy bare-array shape."""
    try:
        return TestDefinition.model_validate(json_load(data))
    except (ValueError, TypeError, ValidationError) as exc:
        raise MalformedDocument() from exc


class ContentStore:
    """Maps the one logical test definition onto one stored document."""

    def __init__(
        self,
        db: DbSession,
        max_document_bytes: int = MAX_DOCUMENT_BYTES,
        document_id: str = CURRENT_DOCUMENT_ID,
    ) -> None:
        self.db = db
        self.max_document_bytes = max_document_bytes
        self.document_id = document_id

    def probe(self) -> ContentDocument | None:
        """Return "the" document: the oldest one, if any exist."""
        stmt = (
            select(ContentDocument)
            .order_by(ContentDocument.created_at, ContentDocument.id)
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def create(self, data: str) -> ContentDocument:
        document = ContentDocument(id=self.document_id, data=data)
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        logger.info("Created new questions document %s", document.id)
        return document

    def update(self, document: ContentDocument, data: str) -> ContentDocument:
        document.data = data
        document.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(document)
        logger.info("Updated existing questions document %s", document.id)
        return document

    def save(self, definition: TestDefinition) -> ContentDocument:
        """Persist the definition, updating the existing document if present.

        Raises:
            PayloadTooLarge: if the serialized definition exceeds the size limit.
        """
        data = serialize_definition(definition)
        size = len(data.encode("utf-8"))
        if size > self.max_document_bytes:
            logger.warning(
                "Refusing to save %d bytes (limit %d)", size, self.max_document_bytes
            )
            raise PayloadTooLarge(
                f"Test content is {size} bytes, limit is {self.max_document_bytes}"
            )

        with _write_lock:
            try:
                return self._upsert(data)
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.error("Failed to save questions: %s", exc)
                raise StoreUnavailable("Failed to save questions") from exc

    def _upsert(self, data: str) -> ContentDocument:
        document = self.probe()
        if document is not None:
            return self.update(document, data)
        try:
            return self.create(data)
        except IntegrityError:
            # Another process created the document between probe and insert
            self.db.rollback()
            logger.warning("Document created concurrently, updating instead")
            document = self.probe()
            if document is None:
                raise
            return self.update(document, data)

    def load(self) -> TestDefinition | None:
        """Read the stored definition.

        Returns None when nothing was saved yet, the store is unreachable or
        the stored document cannot be parsed.
        """
        try:
            document = self.probe()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Content store unavailable: %s", exc)
            return None
        if document is None:
            logger.info("No saved questions found")
            return None
        try:
            return deserialize_definition(document.data)
        except MalformedDocument as exc:
            logger.error(
                "Stored questions document %s is unreadable: %s", document.id, exc.__cause__
            )
            return None

    def load_or_default(self) -> TestDefinition:
        """Stored definition, or the built-in test when none is available."""
        definition = self.load()
        if definition is None:
            return build_default_test()
        return definition

    def count_documents(self) -> int:
        return len(self.db.execute(select(ContentDocument.id)).scalars().all())
