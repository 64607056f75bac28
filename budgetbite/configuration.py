"""Mini README: Centralised configuration for BudgetBite.

Structure:
    * BudgetBiteSettings - Pydantic settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to locate the local key-value store file, the
    storage keys used for the currency selection and the expense list, the
    snapshot rendering options and the web service port. Values can be
    overridden with ``BUDGETBITE_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class BudgetBiteSettings(BaseSettings):
    """Runtime configuration for the BudgetBite ledger."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level (DEBUG, INFO, WARNING, ...).",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the local key-value store and exports.",
    )
    store_filename: str = Field(
        "ledger_store.json",
        description="File name of the JSON key-value store inside the data directory.",
    )
    currency_key: str = Field(
        "bb_curr",
        description="Key under which the selected currency code is persisted.",
    )
    expenses_key: str = Field(
        "bb_expenses",
        description="Key under which the JSON-encoded expense list is persisted.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    raster_scale: int = Field(
        2,
        description="Pixel density multiplier used when rasterising snapshots.",
        ge=1,
        le=8,
    )
    raster_background: str = Field(
        "#000000",
        description="Background colour of rasterised snapshots.",
    )
    export_directory: Optional[Path] = Field(
        None,
        description="Where CLI exports are written. Defaults to <data_directory>/exports.",
    )

    class Config:
        env_prefix = "BUDGETBITE_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def store_path(self) -> Path:
        """Absolute path of the JSON key-value store."""

        return self.data_directory / self.store_filename

    @property
    def resolved_export_directory(self) -> Path:
        """Export directory, falling back to a folder inside the data directory."""

        if self.export_directory is not None:
            return Path(self.export_directory).expanduser().resolve()
        return self.data_directory / "exports"


@lru_cache()
def get_settings() -> BudgetBiteSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetBiteSettings()
