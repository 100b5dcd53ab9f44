from dailyfive.config import config
from dailyfive.database.config import get_tortoise_db_url


def test_postgresql_scheme_is_converted(monkeypatch) -> None:
    monkeypatch.setattr(config, "DATABASE_URL", "postgresql://u:p@db:5432/dailyfive")

    assert get_tortoise_db_url() == "postgres://u:p@db:5432/dailyfive"


def test_railway_postgres_url_round_trips(monkeypatch) -> None:
    monkeypatch.setattr(config, "DATABASE_URL", "postgres://u:p@db:5432/dailyfive")

    assert get_tortoise_db_url() == "postgres://u:p@db:5432/dailyfive"


def test_development_defaults_to_sqlite(monkeypatch) -> None:
    monkeypatch.setattr(config, "DATABASE_URL", None)
    monkeypatch.setattr(config, "ENVIRONMENT", "development")

    assert get_tortoise_db_url() == "sqlite://db.sqlite3"
