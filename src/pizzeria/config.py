"""Runtime settings for the pizzeria domain, read from the environment.

Defaults reproduce the shop's business rules: a 1.4 markup on ingredient
cost, passwords of at least 8 characters, PNG/JPEG photos and ``.dat``
snapshot files.
"""

import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    markup: Decimal = Decimal("1.4")
    min_password_length: int = 8
    photo_extensions: tuple[str, ...] = (".png", ".jpg", ".jpeg")
    snapshot_suffix: str = ".dat"

    @classmethod
    def from_env(cls) -> "Settings":
        extensions = os.getenv("PIZZERIA_PHOTO_EXTENSIONS")
        return cls(
            markup=Decimal(os.getenv("PIZZERIA_MARKUP", "1.4")),
            min_password_length=int(os.getenv("PIZZERIA_MIN_PASSWORD_LENGTH", "8")),
            photo_extensions=(
                tuple(ext.strip().lower() for ext in extensions.split(",") if ext.strip())
                if extensions
                else cls.photo_extensions
            ),
            snapshot_suffix=os.getenv("PIZZERIA_SNAPSHOT_SUFFIX", ".dat"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
