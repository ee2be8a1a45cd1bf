from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Iterable, Optional

from ..core.enums import LeaveType
from ..leaves.model import ApprovedLeaveInterval
from .model import DayEvidence, ExcuseEvidence, LeaveEvidence, PunchEvidence, WfhEvidence
from .strategies.base import ClassificationStrategy
from .strategies.excuse_strategy import ExcuseStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.punch_strategy import PunchStrategy
from .strategies.wfh_strategy import WfhStrategy

_EVIDENCE_BY_LEAVE_TYPE = {
    LeaveType.VACATION: LeaveEvidence,
    LeaveType.SICK_LEAVE: LeaveEvidence,
    LeaveType.EXCUSE: ExcuseEvidence,
    LeaveType.WFH: WfhEvidence,
}


def build_evidence(punches: Iterable[time], leave: Optional[ApprovedLeaveInterval] = None) -> DayEvidence:
    """Collapse a day's punches and covering form into a single evidence variant.

    Earliest punch is the clock-in, latest distinct punch the clock-out; a day
    with one distinct punch has no clock-out. A covering form always wins.
    """

    distinct = sorted(set(punches))
    clock_in = distinct[0] if distinct else None
    clock_out = distinct[-1] if len(distinct) > 1 else None

    if leave is not None:
        return _EVIDENCE_BY_LEAVE_TYPE[leave.leave_type](interval=leave, clock_in=clock_in, clock_out=clock_out)
    return PunchEvidence(clock_in=clock_in, clock_out=clock_out)


@dataclass
class ClassificationStrategyFactory:
    """Factory Pattern: one strategy per evidence variant."""

    strategies: dict[type, ClassificationStrategy] = field(
        default_factory=lambda: {
            LeaveEvidence: LeaveStrategy(),
            ExcuseEvidence: ExcuseStrategy(),
            WfhEvidence: WfhStrategy(),
            PunchEvidence: PunchStrategy(),
        }
    )

    def for_evidence(self, evidence: DayEvidence) -> ClassificationStrategy:
        try:
            return self.strategies[type(evidence)]
        except KeyError:
            raise TypeError(f"No classification strategy for {type(evidence).__name__}") from None
