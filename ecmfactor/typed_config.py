"""
Typed Configuration Classes

Provides type-safe access to configuration values. Values are validated
when the dataclasses are constructed, so a bad ecmfactor.yaml fails at
load time rather than halfway through a factorisation.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config_manager import ConfigManager
from .factorisation import PRIME_BOUND, SMALL_FACTOR_BOUND
from .refiner import DEFAULT_DIGITS, DIGITS_STEP, MAX_DIGITS

METHODS = ('random', 'step')


@dataclass
class FactorisationConfig:
    """Search settings for the factorisation engine."""
    small_factor_bound: int = SMALL_FACTOR_BOUND
    prime_bound: Optional[int] = PRIME_BOUND
    digits: int = DEFAULT_DIGITS
    digits_step: int = DIGITS_STEP
    max_digits: int = MAX_DIGITS
    seed: Optional[int] = None  # None = derive from the number
    method: str = "random"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.small_factor_bound < 2:
            raise ValueError(f"small_factor_bound must be at least 2, got {self.small_factor_bound}")
        if self.prime_bound is not None and self.prime_bound > self.small_factor_bound ** 2:
            raise ValueError(
                f"prime_bound {self.prime_bound} exceeds small_factor_bound squared "
                f"({self.small_factor_bound ** 2})"
            )
        if self.digits <= 0:
            raise ValueError(f"digits must be positive, got {self.digits}")
        if self.digits_step <= 0:
            raise ValueError(f"digits_step must be positive, got {self.digits_step}")
        if self.max_digits < self.digits:
            raise ValueError(f"max_digits ({self.max_digits}) is below digits ({self.digits})")
        if self.method not in METHODS:
            raise ValueError(f"Method must be 'random' or 'step', got {self.method}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    file: Optional[str] = None
    level: str = "WARNING"

    def ensure_log_dir_exists(self) -> None:
        """Create log directory if a log file is configured."""
        if self.file:
            Path(self.file).parent.mkdir(parents=True, exist_ok=True)


@dataclass
class AppConfig:
    """
    Root configuration object.

    Usage:
        config = TypedConfigLoader().load("ecmfactor.yaml")
        print(config.factorisation.max_digits)
    """
    factorisation: FactorisationConfig = field(default_factory=FactorisationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config back to dictionary format."""
        f = self.factorisation
        return {
            'factorisation': {
                'small_factor_bound': f.small_factor_bound,
                'prime_bound': f.prime_bound,
                'digits': f.digits,
                'digits_step': f.digits_step,
                'max_digits': f.max_digits,
                'seed': f.seed,
                'method': f.method,
            },
            'logging': {
                'file': self.logging.file,
                'level': self.logging.level,
            },
        }


class TypedConfigLoader:
    """Load YAML configuration into typed dataclasses."""

    def __init__(self):
        self.config_manager = ConfigManager()

    def load(self, config_path: str) -> AppConfig:
        """
        Load and parse a configuration file (with local overrides).

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If a setting is unknown or fails validation
        """
        raw = self.config_manager.load_config(config_path)
        return self.from_dict(raw)

    def from_dict(self, raw: Dict[str, Any]) -> AppConfig:
        """
        Build an AppConfig from an already loaded dictionary.

        Raises:
            ValueError: If raw names a section or key AppConfig does not have,
                or a value fails validation
        """
        unknown = self.config_manager.check_keys(raw, known_keys())
        if unknown:
            raise ValueError(f"Unknown configuration settings: {', '.join(unknown)}")
        return AppConfig(
            factorisation=self._parse_factorisation(raw.get('factorisation') or {}),
            logging=self._parse_logging(raw.get('logging') or {}),
        )

    def _parse_factorisation(self, raw: Dict[str, Any]) -> FactorisationConfig:
        """Parse factorisation configuration."""
        small_factor_bound = int(raw.get('small_factor_bound', SMALL_FACTOR_BOUND))
        return FactorisationConfig(
            small_factor_bound=small_factor_bound,
            prime_bound=_optional_int(raw.get('prime_bound', small_factor_bound ** 2)),
            digits=int(raw.get('digits', DEFAULT_DIGITS)),
            digits_step=int(raw.get('digits_step', DIGITS_STEP)),
            max_digits=int(raw.get('max_digits', MAX_DIGITS)),
            seed=_optional_int(raw.get('seed')),
            method=raw.get('method', 'random'),
        )

    def _parse_logging(self, raw: Dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration."""
        return LoggingConfig(
            file=raw.get('file'),
            level=str(raw.get('level', 'WARNING')).upper(),
        )


def known_keys() -> Dict[str, List[str]]:
    """Section -> setting names, as read from the config dataclasses."""
    return {
        'factorisation': [f.name for f in fields(FactorisationConfig)],
        'logging': [f.name for f in fields(LoggingConfig)],
    }


def _optional_int(value: Any) -> Optional[int]:
    # YAML reads 1e10 as a string, so go through float for that case
    if value is None:
        return None
    if isinstance(value, str):
        return int(float(value)) if 'e' in value.lower() else int(value)
    return int(value)
