import pytest
from txbuilder.config import BuilderConfig
from txbuilder.errors import (BuildError, ErrorCode, TxBuilderError,
                              TxBuildError, describe)
from txbuilder.utils.canonical import CanonicalEncodeError, dumps


def test_config_defaults(monkeypatch):
    for var in ("TXB_ONBOARD_NAMESPACE", "TXB_ONBOARD_CONTRACT", "TXB_RSA_KEY_SIZE", "TXB_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    cfg = BuilderConfig.from_env()
    assert cfg.onboard_namespace == "default"
    assert cfg.onboard_contract == "onboard"
    assert cfg.rsa_key_size == 2048
    assert cfg.log_level == "WARNING"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("TXB_ONBOARD_NAMESPACE", "ids")
    monkeypatch.setenv("TXB_RSA_KEY_SIZE", "3072")
    monkeypatch.setenv("TXB_LOG_LEVEL", "debug")
    cfg = BuilderConfig.from_env()
    assert cfg.onboard_namespace == "ids"
    assert cfg.rsa_key_size == 3072
    assert cfg.log_level == "DEBUG"


def test_config_validation():
    with pytest.raises(ValueError):
        BuilderConfig.with_overrides(BuilderConfig(), rsa_key_size=512)
    with pytest.raises(ValueError):
        BuilderConfig.with_overrides(BuilderConfig(), log_level="chatty")
    cfg = BuilderConfig.with_overrides(BuilderConfig(), onboard_contract="x", unknown=1)
    assert cfg.onboard_contract == "x"


def test_errors_carry_codes_and_messages():
    err = TxBuildError(ErrorCode.CONTRACT_MISSING)
    assert isinstance(err, TxBuilderError)
    assert err.code == 5006
    assert str(err) == "TxBuildError[5006]: Contract not set"

    assert BuildError().code == ErrorCode.BUILD
    assert "object required" in str(BuildError(detail="object required to build"))
    assert describe(9999) == "Unknown Error"


def test_canonical_dumps():
    assert dumps({"b": [1, "ü"], "a": None}) == '{"a":null,"b":[1,"ü"]}'
    with pytest.raises(CanonicalEncodeError):
        dumps({"x": float("nan")})
