from dataclasses import dataclass
from pathlib import Path

REPORTED_LIMIT = 10
FOLLOWERS_COUNT_LIMIT = 200
HEADER_DATE_FORMAT = "%e %B %Y"
CELL_DATE_FORMAT = "%Y-%m-%d"

@dataclass(frozen=True)
class Settings:
    base_dir: Path
    input_csv: Path
    thumbnails_dir: Path
    reported_limit: int = REPORTED_LIMIT
    followers_count_limit: int = FOLLOWERS_COUNT_LIMIT
    header_date_format: str = HEADER_DATE_FORMAT
    cell_date_format: str = CELL_DATE_FORMAT

def build_settings(
    base_dir: str,
    reported_limit: int = REPORTED_LIMIT,
    followers_count_limit: int = FOLLOWERS_COUNT_LIMIT,
) -> Settings:
    base = Path(base_dir)
    return Settings(
        base_dir=base,
        input_csv=base / "data.csv",
        thumbnails_dir=base / "thumbnails",
        reported_limit=reported_limit,
        followers_count_limit=followers_count_limit,
    )
