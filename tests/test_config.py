"""Settings tests — env loading and the no-default-secret rule."""

import pydantic
import pytest

from voyagehub.config import Settings
from voyagehub.main import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # No stray .env file or VOYAGEHUB_* vars from the developer's shell.
    monkeypatch.chdir(tmp_path)
    for var in ("VOYAGEHUB_JWT_SECRET", "VOYAGEHUB_ENVIRONMENT", "VOYAGEHUB_DATABASE_URL"):
        monkeypatch.delenv(var, raising=False)


def test_missing_secret_refuses_to_load():
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_app_refuses_to_start_without_secret():
    with pytest.raises(pydantic.ValidationError):
        create_app()


def test_empty_secret_refused(monkeypatch):
    monkeypatch.setenv("VOYAGEHUB_JWT_SECRET", "")
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_loads_from_env(monkeypatch):
    monkeypatch.setenv("VOYAGEHUB_JWT_SECRET", "dev-secret")
    monkeypatch.setenv("VOYAGEHUB_BCRYPT_ROUNDS", "12")
    s = Settings()
    assert s.jwt_secret == "dev-secret"
    assert s.bcrypt_rounds == 12
    assert s.token_expire_days == 7
    assert s.jwt_algorithm == "HS256"


def test_loads_from_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("VOYAGEHUB_JWT_SECRET=from-dotenv\n")
    assert Settings().jwt_secret == "from-dotenv"


def test_short_secret_rejected_in_production():
    with pytest.raises(pydantic.ValidationError):
        Settings(jwt_secret="short", environment="production")


def test_long_secret_accepted_in_production():
    s = Settings(jwt_secret="x" * 32, environment="production")
    assert s.environment == "production"


def test_bcrypt_rounds_bounds():
    with pytest.raises(pydantic.ValidationError):
        Settings(jwt_secret="dev-secret", bcrypt_rounds=3)
