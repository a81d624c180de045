"""
heuristics.py

Lightweight, explainable URL heuristic engine for social-engineering
detection.

Each rule looks at the raw input and the normalized URL on its own and
either stays silent or returns a RuleHit (a Finding plus the trace event to
print). Rules never see each other's output.

Example:
    >>> from lurescan.app.normalizer import normalize
    >>> engine = RuleEngine()
    >>> raw = "http://192.168.1.1"
    >>> [h.finding.rule for h in engine.evaluate(raw, normalize(raw))]
    ['insecure_protocol', 'ip_host']
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Callable, List, NamedTuple, Optional, Tuple

from .models import Category, Finding, NormalizedURL, Severity, Status, TraceEvent

logger = logging.getLogger(__name__)

BRAND_KEYWORDS = (
    'paypal', 'apple', 'google', 'microsoft', 'login',
    'secure', 'account', 'verify', 'update',
)

# Dotted quad of 1-3 digit groups; 999.999.999.999 matches on purpose.
IP_RE = re.compile(r'^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$')


@dataclass(frozen=True)
class Weights:
    insecure_protocol: int = 20
    ip_host: int = 50
    subdomain_depth: int = 30
    brand_keyword: int = 40
    long_url: int = 15
    credentials: int = 40


@dataclass(frozen=True)
class HeuristicConfig:
    """Thresholds and keyword list (tweakable, never mutated)."""
    keywords: Tuple[str, ...] = BRAND_KEYWORDS
    max_length: int = 75        # > 75 => suspicious
    max_host_parts: int = 3     # > 3 => suspicious
    brand_skip_parts: int = 2   # registrable domain + TLD, naive
    weights: Weights = field(default_factory=Weights)

    def to_dict(self) -> dict:
        return {
            'keywords': list(self.keywords),
            'max_length': self.max_length,
            'max_host_parts': self.max_host_parts,
            'brand_skip_parts': self.brand_skip_parts,
            'weights': asdict(self.weights),
        }


DEFAULT_CONFIG = HeuristicConfig()


class RuleHit(NamedTuple):
    finding: Finding
    event: TraceEvent


Rule = Callable[[str, NormalizedURL, HeuristicConfig], Optional[RuleHit]]


def _hit(rule: str, category: Category, status: Status, message: str,
         detail: str, delta: int) -> RuleHit:
    severity = Severity.DANGER if status is Status.DANGER else Severity.WARNING
    finding = Finding(rule, category, status, message, detail, delta)
    return RuleHit(finding, TraceEvent(detail, severity))


def is_ip_host(host: str) -> bool:
    return bool(IP_RE.match(host))


def insecure_protocol(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if url.scheme != 'http':
        return None
    return _hit('insecure_protocol', Category.PROTOCOL, Status.WARNING,
                'Insecure (HTTP)', 'Protocol Warning: Connection is not encrypted',
                config.weights.insecure_protocol)


def ip_host(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if not is_ip_host(url.host):
        return None
    return _hit('ip_host', Category.DOMAIN, Status.DANGER,
                'IP Address Used', 'Identity Warning: Host is a direct IP address',
                config.weights.ip_host)


def subdomain_depth(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if is_ip_host(url.host):
        return None
    count = len(url.host_parts)
    if count <= config.max_host_parts:
        return None
    return _hit('subdomain_depth', Category.DOMAIN, Status.WARNING,
                'Excessive Subdomains', f'Structure Warning: {count} domain parts detected.',
                config.weights.subdomain_depth)


def _find_keyword_part(parts: Tuple[str, ...], config: HeuristicConfig) -> Optional[str]:
    """First host part (excluding domain + TLD) containing a keyword."""
    relevant = parts[:max(0, len(parts) - config.brand_skip_parts)]
    for part in relevant:
        if any(k in part for k in config.keywords):
            return part
    return None


def brand_keyword(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if is_ip_host(url.host):
        return None
    part = _find_keyword_part(url.host_parts, config)
    if part is None:
        return None
    return _hit('brand_keyword', Category.PATTERN, Status.DANGER,
                'Brand Imitation', f"Suspicious Keyword: '{part}' found in subdomain",
                config.weights.brand_keyword)


def long_url(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if len(raw) <= config.max_length:
        return None
    return _hit('long_url', Category.OBFUSCATION, Status.WARNING,
                'Excessive Length', 'Heuristic: URL length exceeds normal parameters',
                config.weights.long_url)


def embedded_credentials(raw: str, url: NormalizedURL, config: HeuristicConfig) -> Optional[RuleHit]:
    if not (url.username or url.password):
        return None
    return _hit('embedded_credentials', Category.OBFUSCATION, Status.DANGER,
                'Embedded Credentials',
                'Security Alert: URL contains username/password (@ symbol)',
                config.weights.credentials)


# Execution order matters: a later hit in the same category overwrites the badge.
DEFAULT_RULES: Tuple[Rule, ...] = (
    insecure_protocol,
    ip_host,
    subdomain_depth,
    brand_keyword,
    long_url,
    embedded_credentials,
)


class RuleEngine:
    """Runs an ordered, injected rule set against one normalized URL."""

    def __init__(self, config: HeuristicConfig = DEFAULT_CONFIG,
                 rules: Tuple[Rule, ...] = DEFAULT_RULES):
        self.config = config
        self.rules = tuple(rules)

    def evaluate(self, raw: str, url: NormalizedURL) -> List[RuleHit]:
        hits = []
        for rule in self.rules:
            hit = rule(raw, url, self.config)
            if hit is None:
                continue
            logger.debug("rule %s fired (+%d) for %s", hit.finding.rule, hit.finding.delta, url.host)
            hits.append(hit)
        return hits
