from datetime import datetime, timezone
from typing import Any
from bson.objectid import ObjectId
from mongoengine import Document, DictField, DateTimeField


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from the driver."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseDocumentMixin:
    # Fields never serialized into a response payload.
    hidden_fields: tuple[str, ...] = ()

    def _sanitize_value(self, value: Any) -> Any:
        if isinstance(value, Document):
            return str(value.id)
        if isinstance(value, list):
            return [self._sanitize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._sanitize_value(v) for k, v in value.items()}
        if isinstance(value, datetime):
            return as_utc(value).isoformat()
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def to_output(self, fields=None, exclude=None):
        data: dict[str, Any] = {}
        exclude = set(exclude or []) | set(self.hidden_fields)
        fields = fields or self._fields.keys()

        for field in fields:
            if field in exclude or field == "id":
                continue
            value = getattr(self, field)
            data[field] = self._sanitize_value(value)

        data["id"] = str(self.id)
        return data

    def to_dict(self, fields=None, exclude=None):
        return self.to_output(fields=fields, exclude=exclude)


class BaseDocument(Document, BaseDocumentMixin):
    metadata = DictField(default=dict, null=False)
    created_at = DateTimeField(default=utcnow, null=False)
    updated_at = DateTimeField(default=utcnow, null=False)

    meta = {
        "abstract": True,
    }

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
