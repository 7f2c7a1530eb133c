"""Outcomes of single comparisons and the report that accumulates them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Union


class OutcomeStatus(Enum):
    """Статусы выполнения проверки."""

    PASS = auto()
    FAIL = auto()


@dataclass(frozen=True)
class UnitSuccess:
    test: str
    expected: str

    @property
    def status(self) -> OutcomeStatus:
        return OutcomeStatus.PASS

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.name, "test": self.test, "expected": self.expected}


@dataclass(frozen=True)
class UnitError:
    test: str
    expected: str
    actual: str
    message: str

    @property
    def status(self) -> OutcomeStatus:
        return OutcomeStatus.FAIL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "test": self.test,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }


Outcome = Union[UnitSuccess, UnitError]


@dataclass
class Report:
    """Aggregated outcomes of one check invocation.

    ``success + error == len(outcomes)`` holds at all times: :meth:`record`
    is the only way an outcome gets in, and it bumps exactly one counter.
    """

    success: int = 0
    error: int = 0
    outcomes: List[Outcome] = field(default_factory=list)

    def record(self, outcome: Outcome) -> Outcome:
        if isinstance(outcome, UnitSuccess):
            self.success += 1
        elif isinstance(outcome, UnitError):
            self.error += 1
        else:
            raise TypeError(f"Unsupported outcome type: {type(outcome).__name__}")
        self.outcomes.append(outcome)
        return outcome

    def extend(self, other: "Report") -> None:
        for outcome in other.outcomes:
            self.record(outcome)

    @property
    def ok(self) -> bool:
        return self.error == 0

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self.outcomes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def check_exists(found: bool, expected: bool, report: Report, subject: str) -> Outcome:
    """Сравнивает факт наличия сущности с ожидаемым.

    Parameters
    ----------
    found:
        Найдена ли сущность (пользователь, группа, файл) в системе.
    expected:
        Ожидаемое наличие.
    report:
        Отчёт, в который записывается результат.
    subject:
        Префикс имени проверки, например ``user`` или ``group``.

    Returns
    -------
    Outcome
        Записанный в отчёт результат.
    """

    test_name = f"{subject} - exists"
    if found == expected:
        return report.record(UnitSuccess(test=test_name, expected=_bool_text(expected)))

    message = f"{subject} exists" if found else f"{subject} doesn't exist"
    return report.record(
        UnitError(
            test=test_name,
            expected=_bool_text(expected),
            actual=_bool_text(found),
            message=message,
        )
    )
