# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.


import pytest

from models import ConfigMapKeySelector, SecretKeySelector, SecretOrConfigMap


@pytest.fixture
def secret_key():
    return SecretKeySelector(name="tls-secret", key="tls.key")


@pytest.fixture
def secret_ref():
    return SecretOrConfigMap(secret=SecretKeySelector(name="tls-secret", key="tls.crt"))


@pytest.fixture
def configmap_ref():
    return SecretOrConfigMap(config_map=ConfigMapKeySelector(name="tls-ca", key="ca.crt"))


@pytest.fixture
def conflicting_ref():
    return SecretOrConfigMap(
        secret=SecretKeySelector(name="tls-secret", key="ca.crt"),
        config_map=ConfigMapKeySelector(name="tls-ca", key="ca.crt"),
    )
