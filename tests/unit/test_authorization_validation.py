# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

import pytest

from errors import (
    AuthorizationError,
    ConflictingCredentialsError,
    MissingCredentialsError,
    ReservedTypeError,
)
from models import Authorization, SafeAuthorization


@pytest.mark.parametrize("auth_type", ["basic", "Basic", "BASIC", "  Basic ", "\tbasic\n"])
def test_safe_authorization_rejects_basic(secret_key, auth_type):
    with pytest.raises(ReservedTypeError) as exc:
        SafeAuthorization(type=auth_type, credentials=secret_key).validate()

    assert 'use "basicAuth" instead' in str(exc.value)


@pytest.mark.parametrize("auth_type", ["basic", " BASIC "])
def test_authorization_rejects_basic(auth_type):
    with pytest.raises(ReservedTypeError):
        Authorization(type=auth_type, credentials_file="/etc/token").validate()


@pytest.mark.parametrize("auth_type", ["", "Bearer", "bearer", "Token", "basically"])
def test_safe_authorization_accepts_other_types(secret_key, auth_type):
    SafeAuthorization(type=auth_type, credentials=secret_key).validate()


def test_safe_authorization_requires_credentials():
    with pytest.raises(MissingCredentialsError) as exc:
        SafeAuthorization(type="Bearer").validate()

    assert "credentials are required" in str(exc.value)


def test_authorization_rejects_both_credential_forms():
    authorization = Authorization.model_validate({
        "type": "Bearer",
        "credentials": {"name": "token", "key": "token"},
        "credentialsFile": "/var/run/secrets/token",
    })

    with pytest.raises(ConflictingCredentialsError) as exc:
        authorization.validate()

    assert "both credentials and credentialsFile" in str(exc.value)
    assert isinstance(exc.value, AuthorizationError)


@pytest.mark.parametrize(
    "document",
    [
        {"credentials": {"name": "token", "key": "token"}},
        {"credentialsFile": "/var/run/secrets/token"},
    ],
)
def test_authorization_accepts_a_single_credential_form(document):
    Authorization.model_validate(document).validate()


def test_authorization_without_credentials_is_disabled_not_invalid():
    # Unlike SafeAuthorization, neither form being set is accepted.
    Authorization().validate()
    Authorization(type="Bearer").validate()


def test_reserved_type_is_checked_first(secret_key):
    authorization = Authorization(
        type="basic", credentials=secret_key, credentials_file="/var/run/secrets/token"
    )

    with pytest.raises(ReservedTypeError):
        authorization.validate()


def test_scheme_defaults_to_bearer(secret_key):
    assert SafeAuthorization(credentials=secret_key).scheme == "Bearer"
    assert SafeAuthorization(type=" Token ", credentials=secret_key).scheme == "Token"
