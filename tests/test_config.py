from shopify_auth.core.config import Settings


def test_shopify_credentials_use_aliases(monkeypatch):
    monkeypatch.setenv("SHOPIFY_API_KEY", "key")
    monkeypatch.setenv("SHOPIFY_SECRET", "secret")
    monkeypatch.setenv("SHOPIFY_SHOP", "acme")

    settings = Settings()
    assert settings.shopify_api_key == "key"
    assert settings.shopify_secret == "secret"
    assert settings.shopify_shop == "acme"


def test_strategy_options_have_defaults(monkeypatch):
    monkeypatch.delenv("SHOPIFY_UID_FIELD", raising=False)
    monkeypatch.delenv("SHOPIFY_DEFAULT_SCOPE", raising=False)
    monkeypatch.delenv("SHOPIFY_VERIFY_HMAC", raising=False)

    settings = Settings(_env_file=None)
    assert settings.shopify_uid_field == "login"
    assert settings.shopify_default_scope == "read_products,read_customers,read_orders"
    assert settings.shopify_verify_hmac is False
    assert settings.shopify_http_timeout_seconds == 10.0


def test_strategy_options_use_aliases(monkeypatch):
    monkeypatch.setenv("SHOPIFY_UID_FIELD", "email")
    monkeypatch.setenv("SHOPIFY_DEFAULT_SCOPE", "read_orders")
    monkeypatch.setenv("SHOPIFY_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SHOPIFY_VERIFY_HMAC", "true")

    settings = Settings()
    assert settings.shopify_uid_field == "email"
    assert settings.shopify_default_scope == "read_orders"
    assert settings.shopify_http_timeout_seconds == 2.5
    assert settings.shopify_verify_hmac is True


def test_endpoint_templates_have_defaults(monkeypatch):
    monkeypatch.delenv("SHOPIFY_AUTHORIZE_URL", raising=False)
    monkeypatch.delenv("SHOPIFY_TOKEN_URL", raising=False)

    settings = Settings(_env_file=None)
    assert settings.shopify_authorize_url == "https://{shop}/admin/oauth/authorize"
    assert settings.shopify_token_url == "https://{shop}/admin/oauth/access_token"


def test_log_level_is_upper_cased(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"


def test_rate_limit_can_be_disabled(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

    settings = Settings(_env_file=None)
    assert settings.rate_limit_enabled is False
