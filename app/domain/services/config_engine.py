"""
CONFIG ENGINE
Load, validate, and expose billing configuration

RESPONSIBILITIES:
- Load YAML configuration files
- Validate configuration integrity
- Expose read-only typed objects

RULES:
❌ No silent defaults if a config file is missing
✅ Fail fast on invalid config
✅ Deterministic output
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict

import yaml

from app.domain.models import BillingPolicy

logger = logging.getLogger(__name__)


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for billing configuration
    """

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self._billing_policy: BillingPolicy = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_billing()
        logger.info(
            "CONFIG_LOADED | dir=%s | default_rate=%s | standard_days=%s",
            self.config_dir,
            self._billing_policy.default_monthly_rate,
            self._billing_policy.standard_month_days,
        )

    def _read_yaml(self, name: str) -> Dict:
        path = self.config_dir / name
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    def _load_billing(self) -> None:
        """Load billing policy from billing.yml"""
        data = self._read_yaml("billing.yml").get("billing")
        if not isinstance(data, dict):
            raise ValueError("billing.yml must define a 'billing' section")

        try:
            rate = Decimal(str(data["default_monthly_rate"]))
            standard_days = int(data["standard_month_days"])
        except KeyError as e:
            raise ValueError(f"Missing billing setting: {e.args[0]}") from e
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValueError(f"Invalid billing setting: {e}") from e

        self._billing_policy = BillingPolicy(
            default_monthly_rate=rate,
            standard_month_days=standard_days,
            currency=str(data.get("currency", "EUR")),
        )

    @property
    def billing_policy(self) -> BillingPolicy:
        if self._billing_policy is None:
            raise RuntimeError("Configuration not loaded. Call load_all() first")
        return self._billing_policy
