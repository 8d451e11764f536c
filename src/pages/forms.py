from __future__ import annotations

from typing import Any, Sequence

from app_logging import get_logger
from exceptions import FetchCancelled
from fetching.cancellation import CancellationToken
from resources.client import ResourceClient
from storage.drafts import DraftStore


class EntityForm:
    """Add/edit form state with draft persistence and a duplicate pre-check.

    The duplicate check runs against the same best-effort list fetch the
    list pages use, so it can miss existing records.
    """

    def __init__(
        self,
        client: ResourceClient,
        drafts: DraftStore | None = None,
        required: Sequence[str] = ("name",),
        unique_field: str | None = "name",
        min_length: int = 2,
        max_length: int = 100,
    ):
        self.client = client
        self.drafts = drafts
        self.required = tuple(required)
        self.unique_field = unique_field
        self.min_length = min_length
        self.max_length = max_length
        self.fields: dict[str, Any] = {}
        self.duplicate: dict[str, str] | None = None
        self._checker: CancellationToken | None = None
        self._log = get_logger(f"assetdesk.pages.forms.{client.spec.name}")

    def restore(self) -> dict[str, Any]:
        if self.drafts is not None:
            self.fields.update(self.drafts.load())
        return self.fields

    def set_field(self, key: str, value: Any) -> None:
        self.fields[key] = value
        if key == self.unique_field:
            self.duplicate = None
        if self.drafts is not None:
            self.drafts.save(self.fields)

    def validate(self) -> list[str]:
        errors = []
        for name in self.required:
            value = str(self.fields.get(name) or "").strip()
            if not self.min_length <= len(value) <= self.max_length:
                errors.append(f"{name} must be between {self.min_length} and {self.max_length} characters.")
        if self.duplicate is not None:
            existing = self.duplicate.get(self.unique_field or "name", "")
            errors.append(f'A {self.client.spec.entity} named "{existing}" already exists.')
        return errors

    def check_duplicate(self, exclude_id: str | None = None) -> dict[str, str] | None:
        if self.unique_field is None:
            return None
        if self._checker is not None:
            self._checker.cancel("superseded")
        token = CancellationToken()
        self._checker = token
        value = str(self.fields.get(self.unique_field) or "")
        try:
            match = self.client.find_duplicate(value, self.unique_field, exclude_id, token)
        except FetchCancelled:
            self._log.debug("duplicate_check_cancelled")
            return None
        if token.cancelled:
            return None
        self.duplicate = match
        if match is not None:
            self._log.info("duplicate_found", extra={"id": match["id"]})
        return match

    def submit(self, record_id: str | None = None) -> dict[str, str] | None:
        """Create (or update, with ``record_id``) and clear the draft.

        Raises:
            ValueError: the form does not validate.
            MutationError: the backend rejected the write.
        """
        errors = self.validate()
        if errors:
            raise ValueError(errors[0])
        payload = {k: v.strip() if isinstance(v, str) else v for k, v in self.fields.items()}
        if record_id is None:
            result = self.client.create(payload)
        else:
            self.client.update(record_id, payload)
            result = None
        if self.drafts is not None:
            self.drafts.clear()
        self._log.info("submitted", extra={"id": record_id or (result or {}).get("id")})
        return result

    def reset(self) -> None:
        self.fields.clear()
        self.duplicate = None
        if self.drafts is not None:
            self.drafts.clear()


__all__ = ["EntityForm"]
