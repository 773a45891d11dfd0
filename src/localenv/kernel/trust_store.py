"""Trust store: which directories are approved, and for which content.

The store is one JSON document mapping a hashed directory identity to a
TrustRecord. It is read whole and replaced whole on every write.

Failure policy:
- Missing document: empty store.
- Unreadable or malformed document: empty store plus a warning.
- A record that fails validation, or whose directory_hash does not match
  its canonical_path, is skipped with a warning and never trusted.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from localenv._internal.io.files import write_json_atomic

from .hash_utils import canonicalize_dir, hash_path, is_content_hash

STORE_FORMAT = "localenv.trust"
STORE_VERSION = "0.1"
STORE_FILE_MODE = 0o600


class StoreWriteError(OSError):
    """Raised when the trust store cannot be written."""
    pass


def utc_now_iso() -> str:
    """Return UTC timestamp in ISO-8601 format with Z suffix."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class TrustRecord(BaseModel):
    """Approval of one directory's configuration file at one content hash."""
    directory_hash: str = Field(..., description="hash_path() of canonical_path; the storage key")
    canonical_path: str = Field(..., description="Symlink-resolved absolute directory path")
    content_hash: str = Field(..., description="hash_content() of the approved file bytes")
    approved_at: str = Field(..., description="ISO 8601 UTC timestamp of the approval")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("content_hash")
    @classmethod
    def validate_content_hash(cls, v: str) -> str:
        if not is_content_hash(v):
            raise ValueError(f"content_hash must be 'sha256:' + 64 hex chars, got '{v}'")
        return v

    @field_validator("approved_at")
    @classmethod
    def validate_approved_at(cls, v: str) -> str:
        """Validate timestamp is ISO 8601 format."""
        try:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"approved_at must be ISO 8601 format, got '{v}'")
        return v

    @model_validator(mode="after")
    def validate_identity(self):
        if self.directory_hash != hash_path(self.canonical_path):
            raise ValueError(
                f"directory_hash does not match canonical_path '{self.canonical_path}'"
            )
        return self


class TrustDocument(BaseModel):
    """On-disk shape of the trust store."""
    format: Literal["localenv.trust"] = STORE_FORMAT
    version: str = STORE_VERSION
    records: Dict[str, TrustRecord] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class TrustStore:
    """In-memory view of the trust store document."""

    def __init__(self, path: Union[str, os.PathLike], records: Optional[Dict[str, TrustRecord]] = None):
        self.path = Path(path)
        self._records: Dict[str, TrustRecord] = dict(records or {})
        self.warnings: List[str] = []

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    @classmethod
    def load(cls, path: Union[str, os.PathLike]) -> "TrustStore":
        """Load the store from path, degrading to empty on any read problem."""
        store = cls(path)
        if not store.path.exists():
            return store

        try:
            raw = json.loads(store.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            store._warn(f"Could not read trust store at {store.path}; treating as empty ({e})")
            return store

        if not isinstance(raw, dict) or raw.get("format") != STORE_FORMAT:
            store._warn(f"Trust store at {store.path} is not a {STORE_FORMAT} document; treating as empty")
            return store

        raw_records = raw.get("records", {})
        if not isinstance(raw_records, dict):
            store._warn(f"Trust store at {store.path} has malformed records; treating as empty")
            return store

        for key, raw_record in raw_records.items():
            store._load_record(key, raw_record)

        logger.debug(f"Loaded {len(store)} trust record(s) from {store.path}")
        return store

    def _load_record(self, key: str, raw_record: Any) -> None:
        try:
            record = TrustRecord.model_validate(raw_record)
        except ValidationError as e:
            self._warn(f"Skipping corrupt trust record {key}: {e.errors()[0]['msg']}")
            return
        if record.directory_hash != key:
            self._warn(f"Skipping trust record {key}: key does not match directory_hash")
            return
        self._records[key] = record

    def to_document(self) -> TrustDocument:
        return TrustDocument(records=dict(self._records))

    def save(self) -> None:
        """Atomically replace the document on disk.

        Raises:
            StoreWriteError: If the directory or file cannot be written; the
                previous document is left untouched
        """
        data = self.to_document().model_dump(mode="json")
        try:
            write_json_atomic(self.path, data, mode=STORE_FILE_MODE)
        except OSError as e:
            raise StoreWriteError(f"Failed to write trust store {self.path}: {e}") from e
        logger.debug(f"Saved {len(self)} trust record(s) to {self.path}")

    def get(self, directory: Union[str, os.PathLike]) -> Optional[TrustRecord]:
        """Look up the approval record for a directory. Never mutates."""
        return self._records.get(hash_path(canonicalize_dir(directory)))

    def is_trusted(self, directory: Union[str, os.PathLike], content_hash: str) -> bool:
        """True only if a record exists and its hash matches content_hash."""
        record = self.get(directory)
        return record is not None and record.content_hash == content_hash

    def upsert(
        self,
        directory: Union[str, os.PathLike],
        content_hash: str,
        approved_at: Optional[str] = None,
    ) -> TrustRecord:
        """Create or overwrite the record for a directory (in memory only)."""
        canonical = canonicalize_dir(directory)
        record = TrustRecord(
            directory_hash=hash_path(canonical),
            canonical_path=canonical,
            content_hash=content_hash,
            approved_at=approved_at or utc_now_iso(),
        )
        self._records[record.directory_hash] = record
        return record

    def remove(self, directory: Union[str, os.PathLike]) -> Optional[TrustRecord]:
        """Drop the record for a directory, returning it if there was one."""
        return self._records.pop(hash_path(canonicalize_dir(directory)), None)

    def records(self) -> Iterator[TrustRecord]:
        return iter(sorted(self._records.values(), key=lambda r: r.canonical_path))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, directory: Union[str, os.PathLike]) -> bool:
        return self.get(directory) is not None
