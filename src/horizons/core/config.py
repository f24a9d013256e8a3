"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class SourceConfig(BaseSettings):
    """Raw payroll export (source spreadsheet) layout.

    Column positions are 0-based indices into a row returned by
    ``get_all_values``.
    """

    model_config = {"env_prefix": "HORIZONS_SOURCE_"}

    spreadsheet_id: str = ""
    sheet_name: str = "Sheet1"
    employee_column: int = 0  # A
    burden_column: int = 1  # B
    amount_column: int = 3  # D
    fx_rate_column: int = 7  # H
    pay_date_column: int | None = None


class MasterConfig(BaseSettings):
    """Per-country tracking workbook (master spreadsheet) layout."""

    model_config = {"env_prefix": "HORIZONS_MASTER_"}

    spreadsheet_id: str = ""
    master_tab_name: str = "master"
    header_tab: str = ""  # empty: read headers from each target tab
    name_column: int = 1  # B, 0-based
    code_column: int = 2  # C, 0-based
    date_column: int = 6  # G, 0-based
    code_prefix: str = "PSM"
    header_row: int = 1
    mapping_start_column: int = 23  # W, 1-based
    fx_rate_column: int = 13  # M, 1-based
    skip_label: str = "Skip"


class ReconcileConfig(BaseSettings):
    """Matching and write behaviour shared by both reconciliation variants."""

    model_config = {"env_prefix": "HORIZONS_RECONCILE_"}

    allow_multiple_matches: bool = False
    verify_writes: bool = True
    log_prior_values: bool = True
    # interactive variant only; None passes every source burden through
    burden_allow_list: list[str] | None = None
    # 1-based master columns for the fixed variant, keyed by BurdenCategory value
    fixed_columns: dict[str, int] = Field(
        default_factory=lambda: {
            "Gross Income": 14,
            "Employer Social Security": 15,
            "Employer Pension": 16,
            "Employer Health Insurance": 17,
            "Payroll Tax Surcharge": 18,
        }
    )


class RedisConfig(BaseSettings):
    """Redis session store configuration."""

    model_config = {"env_prefix": "HORIZONS_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    decode_responses: bool = True


class SessionConfig(BaseSettings):
    """Two-step interaction bridge."""

    model_config = {"env_prefix": "HORIZONS_SESSION_"}

    backend: Literal["redis", "memory"] = "redis"
    namespace: str = "horizons"
    ttl_seconds: int = 6 * 60 * 60


class GoogleConfig(BaseSettings):
    """Google Sheets service account configuration."""

    model_config = {"env_prefix": "HORIZONS_GOOGLE_"}

    credentials_file: str = "credentials.json"
    scopes: list[str] = Field(
        default_factory=lambda: [
            "https://www.googleapis.com/auth/spreadsheets",
            "https://www.googleapis.com/auth/drive.readonly",
        ]
    )


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "HORIZONS_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    user: str = "payroll-admin"

    source: SourceConfig = SourceConfig()
    master: MasterConfig = MasterConfig()
    reconcile: ReconcileConfig = ReconcileConfig()
    redis: RedisConfig = RedisConfig()
    session: SessionConfig = SessionConfig()
    google: GoogleConfig = GoogleConfig()
