# models/enums.py

from enum import Enum

class SyncStatus(Enum):
    SAVED = "saved"
    FAILED = "failed"
    SKIPPED = "skipped"

class PullStatus(Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"

class UpsertOutcome(Enum):
    CREATED = "created"
    UPDATED = "updated"
