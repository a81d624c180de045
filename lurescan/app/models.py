"""
models.py

Value types shared by the heuristic engine, the API and the front end.
Every object here is created inside a single scan and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple


class Category(str, Enum):
    PROTOCOL = "protocol"
    DOMAIN = "domain"
    OBFUSCATION = "obfuscation"
    PATTERN = "pattern"


class Status(str, Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    DANGER = "DANGER"


class Label(str, Enum):
    LIKELY_SAFE = "LIKELY_SAFE"
    SUSPICIOUS = "SUSPICIOUS"
    HIGH_RISK = "HIGH_RISK"
    INVALID_URL = "INVALID_URL"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
    SUCCESS = "success"


@dataclass(frozen=True)
class NormalizedURL:
    scheme: str
    host: str
    username: Optional[str] = None
    password: Optional[str] = None
    path_and_query: str = ""

    @property
    def host_parts(self) -> Tuple[str, ...]:
        return tuple(self.host.split("."))


@dataclass(frozen=True)
class ParseFailure:
    """The input could not be parsed as a URL."""
    raw: str
    reason: str


@dataclass(frozen=True)
class CategoryVerdict:
    status: Status
    message: str

    def to_dict(self) -> dict:
        return {"status": self.status.value, "msg": self.message}


@dataclass(frozen=True)
class Finding:
    """One rule firing: score delta plus the verdict it writes."""
    rule: str
    category: Category
    status: Status
    message: str
    detail: str
    delta: int

    @property
    def verdict(self) -> CategoryVerdict:
        return CategoryVerdict(self.status, self.message)

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "category": self.category.value,
            "status": self.status.value,
            "message": self.message,
            "detail": self.detail,
            "delta": self.delta,
        }


@dataclass(frozen=True)
class TraceEvent:
    message: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> dict:
        return {"message": self.message, "severity": self.severity.value}


# Badge text shown for a category no rule touched.
DEFAULT_VERDICTS: Dict[Category, CategoryVerdict] = {
    Category.PROTOCOL: CategoryVerdict(Status.SAFE, "Secure HTTPS"),
    Category.DOMAIN: CategoryVerdict(Status.SAFE, "Standard Domain"),
    Category.OBFUSCATION: CategoryVerdict(Status.SAFE, "No Obfuscation"),
    Category.PATTERN: CategoryVerdict(Status.SAFE, "Clean"),
}


@dataclass(frozen=True)
class ScanResult:
    total_score: int
    verdicts: Mapping[Category, CategoryVerdict]
    label: Label
    findings: Tuple[Finding, ...] = field(default_factory=tuple)

    def verdict(self, category: Category) -> CategoryVerdict:
        return self.verdicts[category]

    def to_dict(self) -> dict:
        return {
            "score": self.total_score,
            "label": self.label.value,
            "details": {c.value: v.to_dict() for c, v in self.verdicts.items()},
            "findings": [f.to_dict() for f in self.findings],
        }
