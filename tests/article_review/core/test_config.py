import pytest

from article_review.core import config


def test_validate_runtime_config_accepts_configured_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'configured-secret-key-with-32-bytes!!')

    config.validate_runtime_config()


@pytest.mark.parametrize('secret', ['', '   '])
def test_validate_runtime_config_requires_secret(monkeypatch: pytest.MonkeyPatch, secret: str) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', secret)

    with pytest.raises(RuntimeError) as exception_info:
        config.validate_runtime_config()

    assert str(exception_info.value) == 'JWT_SECRET_KEY must be set.'


def test_get_list_splits_comma_separated_values() -> None:
    assert config._get_list(' http://a.test , ,http://b.test', []) == ['http://a.test', 'http://b.test']
    assert config._get_list(None, ['default']) == ['default']
