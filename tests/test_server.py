from src.safai import server
from src.safai.config import Settings


def test_main_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(server.settings, "host", "127.0.0.1")
    monkeypatch.setattr(server.settings, "port", 9123)

    server.main()

    assert calls == [
        (
            "safai.main:app",
            {"host": "127.0.0.1", "port": 9123, "proxy_headers": True, "forwarded_allow_ips": "*"},
        )
    ]


def test_port_reads_platform_variable(monkeypatch):
    monkeypatch.delenv("SAFAI_PORT", raising=False)
    monkeypatch.setenv("PORT", "7000")
    assert Settings(_env_file=None).port == 7000

    monkeypatch.setenv("SAFAI_PORT", "7100")
    assert Settings(_env_file=None).port == 7100
