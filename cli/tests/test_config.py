from gumroad_cli import config


def _use_tmp_config(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)


def test_save_and_load_round_trip(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    cfg = config.AppConfig(
        base_path="https://api.gumroad.com/v2",
        access_token="tok",
        profiles={"mock": config.ProfileConfig(base_path="http://127.0.0.1:4010/v2", access_token="")},
    )

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert 'access_token = ""' not in contents
    assert loaded.access_token == "tok"
    assert loaded.profiles["mock"].base_path == "http://127.0.0.1:4010/v2"
    assert loaded.profiles["mock"].access_token == ""


def test_load_config_missing_file_gives_defaults(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    cfg = config.load_config()
    assert cfg.base_path == "https://api.gumroad.com/v2"
    assert cfg.access_token == ""


def test_from_toml_ignores_bad_timeout() -> None:
    cfg = config.from_toml({"timeout_s": "soon", "profiles": {"x": "not a table"}})
    assert cfg.timeout_s == 15.0
    assert cfg.profiles == {}


def test_apply_profile_inherits_missing_values() -> None:
    cfg = config.AppConfig(
        access_token="root-token",
        profiles={"mock": config.ProfileConfig(base_path="http://127.0.0.1:4010/v2")},
    )
    eff = config.apply_profile(cfg, "mock")
    assert eff.base_path == "http://127.0.0.1:4010/v2"
    assert eff.access_token == "root-token"
    assert config.apply_profile(cfg, None) is cfg


def test_resolve_access_token_env_override(monkeypatch) -> None:
    cfg = config.AppConfig(access_token="file-token")
    monkeypatch.setenv(config.ENV_ACCESS_TOKEN, " env-token ")
    assert config.resolve_access_token(cfg) == "env-token"
    monkeypatch.delenv(config.ENV_ACCESS_TOKEN)
    assert config.resolve_access_token(cfg) == "file-token"


def test_resolve_base_path_env_override(monkeypatch) -> None:
    cfg = config.default_config()
    monkeypatch.setenv(config.ENV_BASE_PATH, "http://127.0.0.1:4010/v2/")
    assert config.resolve_base_path(cfg) == "http://127.0.0.1:4010/v2"


def test_normalize_base_path_defaults_to_https() -> None:
    assert config.normalize_base_path("api.gumroad.com/v2") == "https://api.gumroad.com/v2"


def test_normalize_base_path_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_path("localhost:4010/v2") == "http://localhost:4010/v2"


def test_normalize_base_path_strips_trailing_slash() -> None:
    assert config.normalize_base_path("https://api.gumroad.com/v2/") == "https://api.gumroad.com/v2"
