"""Command-line entry points."""

import uvicorn

from food_diary.adapters.sqlite_database import SqliteDatabase
from food_diary.api.app import create_app
from food_diary.app_logging import configure_logging
from food_diary.config import Settings
from food_diary.containers import build_container


def main() -> None:
    """Run the HTTP API with uvicorn."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host=settings.host, port=settings.port)


def reset_db(settings: Settings | None = None) -> None:
    """Drop the database file and recreate an empty schema."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    SqliteDatabase(resolved_settings.db_path).reset()
    print(f"DB reset: {resolved_settings.db_path.resolve()}")  # noqa: T201


if __name__ == "__main__":
    main()
