"""Connect-form model: recognised fields and how they map onto the form."""

from __future__ import annotations

import pathlib
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from compass_harness.constants import DEFAULT_HOSTNAME, DEFAULT_PORT
from compass_harness.core.errors import FormError

NONE = "NONE"

STATIC_FIELDS = ("hostname", "port", "name")

AUTHENTICATION_FIELDS: dict[str, tuple[str, ...]] = {
    NONE: (),
    "MONGODB": ("mongodb_username", "mongodb_password", "mongodb_database_name"),
    "KERBEROS": ("kerberos_principal", "kerberos_password", "kerberos_service_name"),
    "X509": ("x509_username",),
    "LDAP": ("ldap_username", "ldap_password"),
}

SSL_METHODS = (NONE, "UNVALIDATED", "SERVER", "ALL")

SSL_FIELDS = ("ssl_ca", "ssl_certificate", "ssl_private_key", "ssl_private_key_password")

FIELD_SELECTOR = "input[name={field}]"
AUTHENTICATION_SELECT = "select[name=authentication]"
SSL_SELECT = "select[name=ssl]"


def authentication_fields(kind: str) -> tuple[str, ...]:
    """Dependent input names for an authentication kind."""
    try:
        return AUTHENTICATION_FIELDS[kind]
    except KeyError:
        raise FormError(
            f"Unknown authentication kind {kind!r}; expected one of"
            f" {', '.join(AUTHENTICATION_FIELDS)}"
        ) from None


def ssl_fields(method: str) -> tuple[str, ...]:
    """Dependent input names for an SSL method; every method but NONE uses all of them."""
    if method not in SSL_METHODS:
        raise FormError(
            f"Unknown SSL method {method!r}; expected one of {', '.join(SSL_METHODS)}"
        )
    return () if method == NONE else SSL_FIELDS


def is_enabled(value: Any) -> bool:
    """True when a discriminator is present and not the NONE sentinel."""
    return bool(value) and value != NONE


class ConnectionModel(BaseModel):
    """Validated connection form input. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    hostname: Optional[str] = None
    port: Optional[Union[int, str]] = None
    name: Optional[str] = None
    authentication: Optional[str] = None
    mongodb_username: Optional[str] = None
    mongodb_password: Optional[str] = None
    mongodb_database_name: Optional[str] = None
    kerberos_principal: Optional[str] = None
    kerberos_password: Optional[str] = None
    kerberos_service_name: Optional[str] = None
    x509_username: Optional[str] = None
    ldap_username: Optional[str] = None
    ldap_password: Optional[str] = None
    ssl: Optional[str] = None
    ssl_ca: Optional[str] = None
    ssl_certificate: Optional[str] = None
    ssl_private_key: Optional[str] = None
    ssl_private_key_password: Optional[str] = None

    def to_form_values(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def form_values(model: Union[ConnectionModel, Mapping[str, Any], None]) -> dict[str, Any]:
    if model is None:
        return {}
    if isinstance(model, ConnectionModel):
        return model.to_form_values()
    return dict(model)


def with_defaults(model: Union[ConnectionModel, Mapping[str, Any], None]) -> dict[str, Any]:
    """Fill in hostname/port when the caller left them out."""
    values = form_values(model)
    for key, default in (("hostname", DEFAULT_HOSTNAME), ("port", DEFAULT_PORT)):
        if values.get(key) is None:
            values[key] = default
    return values


def load_connections(path: Union[str, pathlib.Path]) -> dict[str, ConnectionModel]:
    """Load named connection fixtures from a YAML mapping of name -> fields."""
    p = pathlib.Path(path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise FormError(f"Connection fixtures in '{p}' must be a mapping")
    try:
        return {name: ConnectionModel(**(fields or {})) for name, fields in raw.items()}
    except ValidationError as exc:
        raise FormError(f"Invalid connection fixture in '{p}': {exc}") from exc
