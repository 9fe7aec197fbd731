"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class RuleType(str, Enum):
    """Detection strategies a configured rule can use."""

    KEYWORD = "keyword"
    EXCESSIVE_CAPS = "excessive_caps"
    URL_DOMAIN = "url_domain"


DEFAULT_PROFANITY_TERMS = ["spam", "scam", "fake", "alert"]
DEFAULT_SHORTENER_DOMAINS = ["bit.ly", "tinyurl.com"]


class RuleConfig(BaseModel):
    """Declarative definition of a single weighted detection rule."""

    id: str = Field(..., min_length=1, description="Stable rule identifier (score-map key)")
    name: str = Field(..., min_length=1, description="Display name listed in verdicts")
    description: str = Field("", description="Human-readable description")
    weight: float = Field(..., ge=0, description="Score contributed when the rule matches")
    type: RuleType = Field(..., description="Detection strategy")
    keywords: List[str] = Field(
        default_factory=list, description="Terms for keyword rules (matched case-insensitively)"
    )
    domains: List[str] = Field(
        default_factory=list, description="Domain fragments for url_domain rules"
    )
    min_length: int = Field(
        10, ge=0, description="excessive_caps: only texts longer than this are checked"
    )
    caps_ratio: float = Field(
        0.7, ge=0.0, le=1.0, description="excessive_caps: uppercase ratio that must be exceeded"
    )

    @field_validator("id", "name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from identifier fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("keywords", "domains")
    @classmethod
    def drop_blank_entries(cls, v: List[str]) -> List[str]:
        """Strip entries and drop blank ones; case is kept as written."""
        return [item.strip() for item in v if item and item.strip()]

    @model_validator(mode="after")
    def validate_strategy_inputs(self):
        """Each strategy needs its own inputs."""
        if self.type == RuleType.KEYWORD and not self.keywords:
            raise ValueError(f"Keyword rule '{self.id}' must list at least one keyword")
        if self.type == RuleType.URL_DOMAIN and not self.domains:
            raise ValueError(f"URL rule '{self.id}' must list at least one domain")
        return self

    model_config = {"use_enum_values": True}


def default_rule_configs() -> List[RuleConfig]:
    """Reference rule set; the fast path expects these three ids to exist."""
    return [
        RuleConfig(
            id="profanity",
            name="Profanity Filter",
            description="Detects common profanity",
            weight=80,
            type=RuleType.KEYWORD,
            keywords=list(DEFAULT_PROFANITY_TERMS),
        ),
        RuleConfig(
            id="excessive_caps",
            name="Excessive Caps",
            description="Detects messages with too many capital letters",
            weight=30,
            type=RuleType.EXCESSIVE_CAPS,
        ),
        RuleConfig(
            id="suspicious_urls",
            name="Suspicious URLs",
            description="Detects potentially malicious URLs",
            weight=60,
            type=RuleType.URL_DOMAIN,
            domains=list(DEFAULT_SHORTENER_DOMAINS),
        ),
    ]


class CacheConfig(BaseModel):
    """Verdict cache settings."""

    enabled: bool = Field(True, description="Cache full-mode verdicts by normalized content")
    ttl: str = Field("1h", description="How long a cached verdict stays valid")
    max_entries: int = Field(10000, ge=1, description="Entries kept before evicting the oldest")

    # Computed field
    ttl_seconds: Optional[int] = None

    @model_validator(mode="after")
    def compute_ttl_seconds(self):
        """Parse ttl into seconds."""
        try:
            self.ttl_seconds = parse_duration(self.ttl)
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the message pre-filter."""

    rules: List[RuleConfig] = Field(
        default_factory=default_rule_configs, description="Ordered rule definitions"
    )
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Verdict cache settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    def get_rule(self, rule_id: str) -> Optional[RuleConfig]:
        """Return the first rule definition with ``rule_id``."""
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None
