import enum
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Iterable, List, Tuple


class DiagnosticKind(str, enum.Enum):
    NO_ROOT_FOUND = "NoRootFound"
    MULTIPLE_ROOTS_FOUND = "MultipleRootsFound"
    CYCLIC_REFERENCE_DETECTED = "CyclicReferenceDetected"
    ORPHANED_RECORD = "OrphanedRecord"
    UNREACHABLE_RECORD = "UnreachableRecord"
    DUPLICATE_ID = "DuplicateId"


@dataclass(frozen=True)
class Diagnostic:
    """Why records were left out of a layout.

    ``fatal`` diagnostics come with an empty layout.
    """

    kind: DiagnosticKind
    message: str
    record_ids: Tuple[Hashable, ...] = ()
    fatal: bool = False

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "record_ids": list(self.record_ids),
            "fatal": self.fatal,
        }


class LayoutError(Exception):
    pass


class InvalidInputShape(LayoutError, TypeError):
    """Input is not a sequence of person records, or a record is malformed."""


class HierarchyError(LayoutError):
    """Records cannot be turned into a single rooted tree."""

    kind: DiagnosticKind

    def __init__(
        self, message: str, record_ids: Iterable[Hashable] = (), collected=None
    ):
        super().__init__(message)
        self.message = message
        self.record_ids = tuple(record_ids)
        # diagnostics gathered before the failure (orphans, duplicates, ...)
        self.collected: List[Diagnostic] = list(collected or [])

    def diagnostic(self) -> Diagnostic:
        return Diagnostic(self.kind, self.message, self.record_ids, fatal=True)


class NoRootFound(HierarchyError):
    kind = DiagnosticKind.NO_ROOT_FOUND


class MultipleRootsFound(HierarchyError):
    kind = DiagnosticKind.MULTIPLE_ROOTS_FOUND


class CyclicReferenceDetected(HierarchyError):
    kind = DiagnosticKind.CYCLIC_REFERENCE_DETECTED
