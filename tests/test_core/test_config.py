from core.config import AppSettings, write_user_env_vars
from core.domain.network import API_BASE_RINKEBY, Network


def test_defaults(monkeypatch):
    for name in ("OPENSEA_NETWORK", "OPENSEA_API_KEY", "OPENSEA_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.network is Network.MAIN
    assert settings.api_key is None
    assert settings.page_size == 20
    assert settings.retry_delay_seconds == 0.0
    assert settings.post_order_retries == 2


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("OPENSEA_NETWORK", "rinkeby")
    monkeypatch.setenv("OPENSEA_API_KEY", "from-env")
    monkeypatch.setenv("OPENSEA_PAGE_SIZE", "50")

    settings = AppSettings(_env_file=None)

    assert settings.network is Network.RINKEBY
    assert settings.network.api_base_url == API_BASE_RINKEBY
    assert settings.api_key == "from-env"
    assert settings.page_size == 50


def test_write_user_env_vars_merges_existing_values(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nOPENSEA_NETWORK=main\nOTHER='kept'\n", encoding="utf-8")

    write_user_env_vars({"OPENSEA_NETWORK": "rinkeby", "OPENSEA_API_KEY": "k"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "OPENSEA_NETWORK=rinkeby" in lines
    assert "OPENSEA_API_KEY=k" in lines
    assert "OTHER=kept" in lines
