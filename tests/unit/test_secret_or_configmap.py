# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

import pytest
import yaml
from pydantic import ValidationError

from errors import ConflictingReferenceError, SpecValidationError
from models import SecretOrConfigMap

BOTH_FORMS = """
secret:
  name: creds
  key: ca.crt
configMap:
  name: creds
  key: ca.crt
"""


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"secret": {"name": "creds", "key": "ca.crt"}},
        {"configMap": {"name": "creds", "key": "ca.crt"}},
    ],
)
def test_at_most_one_form_passes(document):
    SecretOrConfigMap.model_validate(document).validate()


def test_both_forms_fail():
    selector = SecretOrConfigMap.model_validate(yaml.safe_load(BOTH_FORMS))

    with pytest.raises(ConflictingReferenceError) as exc:
        selector.validate()

    assert "can not specify both secret and configMap" in str(exc.value)
    assert isinstance(exc.value, SpecValidationError)


def test_empty_selector_is_empty(configmap_ref):
    assert SecretOrConfigMap().is_empty()
    assert not configmap_ref.is_empty()


def test_wire_name_is_config_map(configmap_ref):
    assert configmap_ref.model_dump(by_alias=True, exclude_none=True) == {
        "configMap": {"name": "tls-ca", "key": "ca.crt"}
    }


def test_key_is_required():
    with pytest.raises(ValidationError):
        SecretOrConfigMap.model_validate({"secret": {"name": "creds"}})


def test_selector_is_immutable(secret_ref):
    with pytest.raises(ValidationError):
        secret_ref.secret = None
