"""Tests for the connect-form model."""

import pytest

from compass_harness.core.errors import FormError
from compass_harness.forms import (
    ConnectionModel,
    authentication_fields,
    form_values,
    is_enabled,
    load_connections,
    ssl_fields,
    with_defaults,
)


def test_connection_model_ignores_unknown_keys():
    m = ConnectionModel(hostname="db1", port=27018, favorite_color="blue")
    assert m.to_form_values() == {"hostname": "db1", "port": 27018}


def test_with_defaults_fills_only_missing():
    assert with_defaults(None) == {"hostname": "localhost", "port": 27017}
    assert with_defaults({"port": 1234}) == {"hostname": "localhost", "port": 1234}
    assert with_defaults({"hostname": None, "name": "x"})["hostname"] == "localhost"


def test_with_defaults_does_not_mutate_input():
    model = {"name": "local"}
    with_defaults(model)
    assert model == {"name": "local"}


def test_form_values_accepts_model_and_mapping():
    assert form_values(ConnectionModel(name="n")) == {"name": "n"}
    assert form_values({"name": "n"}) == {"name": "n"}


def test_authentication_fields():
    assert authentication_fields("NONE") == ()
    assert "mongodb_password" in authentication_fields("MONGODB")
    assert authentication_fields("X509") == ("x509_username",)


def test_unknown_authentication_kind():
    with pytest.raises(FormError) as excinfo:
        authentication_fields("PLAIN")
    assert "PLAIN" in str(excinfo.value)


def test_ssl_fields():
    assert ssl_fields("NONE") == ()
    assert ssl_fields("SERVER") == ssl_fields("ALL")
    assert "ssl_ca" in ssl_fields("UNVALIDATED")


def test_unknown_ssl_method():
    with pytest.raises(FormError) as excinfo:
        ssl_fields("TLS13")
    assert "TLS13" in str(excinfo.value)


def test_is_enabled():
    assert is_enabled("MONGODB")
    assert not is_enabled("NONE")
    assert not is_enabled(None)
    assert not is_enabled("")


def test_load_connections(tmp_path):
    path = tmp_path / "connections.yaml"
    path.write_text(
        "local:\n"
        "  hostname: localhost\n"
        "  port: 27017\n"
        "secured:\n"
        "  hostname: db.example.com\n"
        "  authentication: MONGODB\n"
        "  mongodb_username: admin\n"
        "empty:\n",
        encoding="utf-8",
    )
    fixtures = load_connections(path)
    assert fixtures["local"].port == 27017
    assert fixtures["secured"].mongodb_username == "admin"
    assert fixtures["empty"].to_form_values() == {}


def test_load_connections_rejects_list(tmp_path):
    path = tmp_path / "connections.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(FormError):
        load_connections(path)
