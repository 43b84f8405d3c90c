# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

import pytest
import yaml

from errors import (
    ConflictingReferenceError,
    InvalidClientIDError,
    MissingClientIDError,
    MissingTokenURLError,
    OAuth2Error,
)
from models import OAuth2

VALID_OAUTH2 = """
clientId:
  secret:
    name: oauth2-creds
    key: id
clientSecret:
  name: oauth2-creds
  key: secret
tokenUrl: https://auth.example.com/token
scopes:
  - metrics:read
endpointParams:
  audience: prometheus
"""


@pytest.fixture
def oauth2_document():
    return yaml.safe_load(VALID_OAUTH2)


def test_valid_oauth2_passes(oauth2_document):
    oauth2 = OAuth2.model_validate(oauth2_document)
    oauth2.validate()

    assert oauth2.token_url == "https://auth.example.com/token"
    assert oauth2.scopes == ["metrics:read"]
    assert oauth2.endpoint_params == {"audience": "prometheus"}


@pytest.mark.parametrize("client_id", [{}, {"secret": {"name": "a", "key": "b"}}])
def test_empty_token_url_fails(oauth2_document, client_id):
    oauth2_document["tokenUrl"] = ""
    oauth2_document["clientId"] = client_id

    with pytest.raises(MissingTokenURLError) as exc:
        OAuth2.model_validate(oauth2_document).validate()

    assert "token url must be specified" in str(exc.value)


def test_missing_token_url_fails(oauth2_document):
    del oauth2_document["tokenUrl"]

    with pytest.raises(MissingTokenURLError):
        OAuth2.model_validate(oauth2_document).validate()


def test_empty_client_id_fails(oauth2_document):
    oauth2_document["clientId"] = {}

    with pytest.raises(MissingClientIDError) as exc:
        OAuth2.model_validate(oauth2_document).validate()

    assert "client id must be specified" in str(exc.value)


def test_conflicting_client_id_fails(oauth2_document):
    oauth2_document["clientId"]["configMap"] = {"name": "oauth2-id", "key": "id"}

    with pytest.raises(InvalidClientIDError) as exc:
        OAuth2.model_validate(oauth2_document).validate()

    assert str(exc.value).startswith("invalid OAuth2 client id: ")
    assert isinstance(exc.value.__cause__, ConflictingReferenceError)
    assert isinstance(exc.value, OAuth2Error)
