from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .model import Employee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnmatchedCode:
    code: str
    name: Optional[str]
    file: str


@dataclass
class UnmatchedCodes:
    """Codes that parsed but did not resolve, deduplicated by (code, file)."""

    items: list[UnmatchedCode] = field(default_factory=list)
    _seen: set[tuple[str, str]] = field(default_factory=set, repr=False)

    def add(self, *, code: str, name: Optional[str], file: str) -> None:
        key = (code, file)
        if key in self._seen:
            return
        self._seen.add(key)
        self.items.append(UnmatchedCode(code=code, name=name, file=file))

    def merge(self, other: "UnmatchedCodes") -> "UnmatchedCodes":
        merged = UnmatchedCodes()
        for item in (*self.items, *other.items):
            merged.add(code=item.code, name=item.name, file=item.file)
        return merged

    def __len__(self) -> int:
        return len(self.items)


class EmployeeResolver:
    """Pure lookup from device employee code to Employee.

    A code shared by several active employees is a data-entry problem: it
    resolves to nothing rather than being merged onto one of them.
    """

    def __init__(self, employees: Iterable[Employee]):
        by_code: dict[str, list[Employee]] = defaultdict(list)
        for emp in employees:
            if not emp.is_active or not emp.employee_code:
                continue
            by_code[_normalize_code(emp.employee_code)].append(emp)

        self._by_code: dict[str, Employee] = {}
        self._collisions: set[str] = set()
        for code, matches in by_code.items():
            if len(matches) > 1:
                self._collisions.add(code)
                logger.warning(
                    "Employee code %s is shared by employees %s; punches for it will be reported as unmatched",
                    code,
                    [m.employee_id for m in matches],
                )
                continue
            self._by_code[code] = matches[0]

    @property
    def employees(self) -> list[Employee]:
        """Active employees a device code resolves to, ordered by id."""
        return sorted(self._by_code.values(), key=lambda e: e.employee_id)

    @property
    def collisions(self) -> frozenset[str]:
        return frozenset(self._collisions)

    def resolve(self, code: str) -> Optional[Employee]:
        return self._by_code.get(_normalize_code(code))


def _normalize_code(code: str) -> str:
    return str(code).strip()
