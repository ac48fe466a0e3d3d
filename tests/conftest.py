from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the revcart package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from revcart.core import config as core_config  # noqa: E402
from revcart.db import models  # noqa: E402
from revcart.db import session as db_session  # noqa: E402
import revcart.services.otp_service as otp_module  # noqa: E402


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()


@pytest.fixture()
def outbox(monkeypatch):
    """Capture OTP emails instead of talking SMTP; maps email -> list of codes."""
    sent: dict[str, list[str]] = {}

    def fake_send(to_email, otp, ttl_minutes=10):
        sent.setdefault(to_email, []).append(otp)
        return True

    monkeypatch.setattr(otp_module, "send_otp_email", fake_send)
    return sent
