"""
Builder configuration: onboarding defaults, RSA key parameters and log level.

- Loads sane defaults and supports overrides via environment variables (TXB_*).
- `DEFAULT` is used whenever a caller does not pass an explicit config.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_DEFAULT_ONBOARD_NAMESPACE = "default"
_DEFAULT_ONBOARD_CONTRACT = "onboard"
_MIN_RSA_BITS = 1024


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _parse_log_level(val: Any) -> str:
    name = str(val).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {val!r}")
    return name


def _check_rsa_bits(bits: int) -> int:
    bits = int(bits)
    if bits < _MIN_RSA_BITS:
        raise ValueError(f"rsa_key_size must be >= {_MIN_RSA_BITS}, got {bits}")
    return bits


@dataclass(slots=True)
class BuilderConfig:
    # Onboarding transaction target
    onboard_namespace: str = _DEFAULT_ONBOARD_NAMESPACE
    onboard_contract: str = _DEFAULT_ONBOARD_CONTRACT
    # RSA key generation
    rsa_key_size: int = 2048
    rsa_public_exponent: int = 65537
    # Used by the CLI when it configures logging
    log_level: str = field(default="WARNING")

    @classmethod
    def from_env(cls, prefix: str = "TXB_") -> "BuilderConfig":
        """
        Create config from environment variables:

        TXB_ONBOARD_NAMESPACE   (str)
        TXB_ONBOARD_CONTRACT    (str)
        TXB_RSA_KEY_SIZE        (int, >= 1024)
        TXB_RSA_EXPONENT        (int)
        TXB_LOG_LEVEL           (DEBUG | INFO | WARNING | ERROR)
        """
        return cls(
            onboard_namespace=_env(f"{prefix}ONBOARD_NAMESPACE", _DEFAULT_ONBOARD_NAMESPACE),
            onboard_contract=_env(f"{prefix}ONBOARD_CONTRACT", _DEFAULT_ONBOARD_CONTRACT),
            rsa_key_size=_check_rsa_bits(_env(f"{prefix}RSA_KEY_SIZE", "2048")),
            rsa_public_exponent=int(_env(f"{prefix}RSA_EXPONENT", "65537")),
            log_level=_parse_log_level(_env(f"{prefix}LOG_LEVEL", "WARNING")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["BuilderConfig"] = None, **overrides: Any
    ) -> "BuilderConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        if "rsa_key_size" in overrides:
            data["rsa_key_size"] = _check_rsa_bits(overrides["rsa_key_size"])
        if "log_level" in overrides:
            data["log_level"] = _parse_log_level(overrides["log_level"])
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "onboard_namespace": self.onboard_namespace,
            "onboard_contract": self.onboard_contract,
            "rsa_key_size": int(self.rsa_key_size),
            "rsa_public_exponent": int(self.rsa_public_exponent),
            "log_level": self.log_level,
        }


DEFAULT = BuilderConfig.from_env()

__all__ = ["BuilderConfig", "DEFAULT"]
