# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Credential and transport-security value objects.

Every model is a frozen snapshot of a wire document. Parsing only checks
structure; the semantic rules (mutually exclusive fields, cert/key pairs,
required-one-of alternatives) live in each model's `validate()`, which
raises the error of the first violated rule and returns None otherwise.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from constants import GROUP_NAME, REFERENCEABLE_RESOURCES, RESERVED_AUTHORIZATION_TYPE, RESOURCE_TO_KIND
from errors import (
    ConflictingCAError,
    ConflictingCertError,
    ConflictingCredentialsError,
    ConflictingKeyError,
    ConflictingReferenceError,
    IncompleteCertKeyPairError,
    InvalidCAError,
    InvalidCertError,
    InvalidClientIDError,
    MissingCertError,
    MissingClientIDError,
    MissingCredentialsError,
    MissingKeyError,
    MissingTokenURLError,
    NoTargetSourceError,
    ReservedTypeError,
    SecretOrConfigMapError,
    SpecValidationError,
    UnmappedResourceError,
    WebTLSConfigError,
)
from utils import normalized


class SpecModel(BaseModel):
    """BaseModel for wire documents.

    Attributes are snake_case; documents use the camelCase wire names.
    Both are accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SecretKeySelector(SpecModel):
    """Selects a key of a Secret in the namespace of the referencing object."""
    name: str = ""
    key: str
    optional: Optional[bool] = None


class ConfigMapKeySelector(SpecModel):
    """Selects a key of a ConfigMap in the namespace of the referencing object."""
    name: str = ""
    key: str
    optional: Optional[bool] = None


class SecretOrConfigMap(SpecModel):
    """Data sourced from either a Secret or a ConfigMap. The two fields are mutually exclusive.

    Leaving both unset is legal and means the feature is unused.
    """
    secret: Optional[SecretKeySelector] = None
    config_map: Optional[ConfigMapKeySelector] = None

    def is_empty(self) -> bool:
        """Return True if neither form is set."""
        return self.secret is None and self.config_map is None

    def validate(self) -> None:
        """Reject a selector that sets both the secret and the configMap form."""
        if self.secret is not None and self.config_map is not None:
            raise ConflictingReferenceError()


def _validate_reference(
    selector: SecretOrConfigMap, error: Type[SpecValidationError], context: str
) -> None:
    try:
        selector.validate()
    except SecretOrConfigMapError as e:
        raise error(f"{context}: {e}") from e


class SafeTLSConfig(SpecModel):
    """TLS parameters that only reference Secrets and ConfigMaps, never local files."""
    ca: SecretOrConfigMap = Field(default_factory=SecretOrConfigMap)
    cert: SecretOrConfigMap = Field(default_factory=SecretOrConfigMap)
    key_secret: Optional[SecretKeySelector] = None
    server_name: str = ""
    insecure_skip_verify: bool = False

    def validate(self) -> None:
        """Check the CA and cert selectors, then that the client cert and key come as a pair."""
        if not self.ca.is_empty():
            _validate_reference(self.ca, InvalidCAError, InvalidCAError.default_message)

        if not self.cert.is_empty():
            _validate_reference(self.cert, InvalidCertError, InvalidCertError.default_message)

        if not self.cert.is_empty() and self.key_secret is None:
            raise MissingKeyError()

        if self.key_secret is not None and self.cert.is_empty():
            raise MissingCertError()


class TLSConfig(SafeTLSConfig):
    """SafeTLSConfig extended with paths to files in the scraper's container.

    For each of CA, cert and key, the reference and the file form are
    mutually exclusive. The cert/key pairing is checked across both forms,
    so `certFile` may be paired with `keySecret` and `cert` with `keyFile`.
    """
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""

    def validate(self) -> None:
        """Check each slot for conflicting forms, then the merged cert/key pairing."""
        if not self.ca.is_empty():
            if self.ca_file:
                raise ConflictingCAError()
            _validate_reference(self.ca, InvalidCAError, InvalidCAError.default_message)

        if not self.cert.is_empty():
            if self.cert_file:
                raise ConflictingCertError()
            _validate_reference(self.cert, InvalidCertError, InvalidCertError.default_message)

        if self.key_file and self.key_secret is not None:
            raise ConflictingKeyError()

        has_cert = bool(self.cert_file) or not self.cert.is_empty()
        has_key = bool(self.key_file) or self.key_secret is not None

        if has_cert and not has_key:
            raise IncompleteCertKeyPairError(missing="key")

        if has_key and not has_cert:
            raise IncompleteCertKeyPairError(missing="cert")


class WebTLSConfig(SpecModel):
    """TLS parameters served by the web endpoint of the monitoring server itself."""
    key_secret: Optional[SecretKeySelector] = None
    cert: SecretOrConfigMap = Field(default_factory=SecretOrConfigMap)
    client_auth_type: str = ""
    client_ca: SecretOrConfigMap = Field(default_factory=SecretOrConfigMap, alias="client_ca")
    min_version: str = ""
    max_version: str = ""
    cipher_suites: List[str] = Field(default_factory=list)
    prefer_server_cipher_suites: Optional[bool] = None
    curve_preferences: List[str] = Field(default_factory=list)

    def validate(self) -> None:
        """Unlike scrape TLS, serving TLS requires both a cert and a key."""
        if not self.client_ca.is_empty():
            _validate_reference(self.client_ca, WebTLSConfigError, WebTLSConfigError.default_message)

        if self.cert.is_empty():
            raise WebTLSConfigError(f"{WebTLSConfigError.default_message}: cert must be defined")
        _validate_reference(self.cert, WebTLSConfigError, WebTLSConfigError.default_message)

        if self.key_secret is None:
            raise WebTLSConfigError(f"{WebTLSConfigError.default_message}: key must be defined")


class OAuth2(SpecModel):
    """OAuth2 client-credentials descriptor."""
    client_id: SecretOrConfigMap = Field(default_factory=SecretOrConfigMap)
    client_secret: Optional[SecretKeySelector] = None
    token_url: str = ""
    scopes: List[str] = Field(default_factory=list)
    endpoint_params: Dict[str, str] = Field(default_factory=dict)

    def validate(self) -> None:
        """Require a token url and a single, well-formed client id source."""
        if not self.token_url:
            raise MissingTokenURLError()

        if self.client_id.is_empty():
            raise MissingClientIDError()

        _validate_reference(self.client_id, InvalidClientIDError, InvalidClientIDError.default_message)


class BasicAuth(SpecModel):
    """Username and password Secret keys for HTTP basic authentication."""
    username: Optional[SecretKeySelector] = None
    password: Optional[SecretKeySelector] = None


class SafeAuthorization(SpecModel):
    """Authorization header sourced from a Secret only.

    An empty type means "Bearer". Basic authentication is rejected here,
    it has its own `basicAuth` section.
    """
    type: str = ""
    credentials: Optional[SecretKeySelector] = None

    @property
    def scheme(self) -> str:
        """Return the header scheme, defaulting to Bearer."""
        return self.type.strip() or "Bearer"

    def _validate_type(self) -> None:
        if normalized(self.type) == RESERVED_AUTHORIZATION_TYPE:
            raise ReservedTypeError()

    def validate(self) -> None:
        """Reject the basic type and a missing credentials reference."""
        self._validate_type()
        if self.credentials is None:
            raise MissingCredentialsError()


class Authorization(SafeAuthorization):
    """Authorization header that may also read its credentials from a local file.

    Setting neither `credentials` nor `credentialsFile` is accepted and
    leaves the header disabled.
    """
    credentials_file: str = ""

    def validate(self) -> None:
        """Reject the basic type and credentials given in both forms."""
        self._validate_type()
        if self.credentials is not None and self.credentials_file:
            raise ConflictingCredentialsError()


class HTTPConfig(SpecModel):
    """HTTP client configuration used to reach a remote endpoint."""
    authorization: Optional[SafeAuthorization] = None
    basic_auth: Optional[BasicAuth] = None
    oauth2: Optional[OAuth2] = None
    bearer_token_secret: Optional[SecretKeySelector] = None
    tls_config: Optional[SafeTLSConfig] = None
    proxy_url: str = Field(default="", alias="proxyURL")
    follow_redirects: Optional[bool] = None

    def validate(self) -> None:
        """Validate every credential section that is set."""
        for section in (self.authorization, self.oauth2, self.tls_config):
            if section is not None:
                section.validate()


class LabelSelectorRequirement(SpecModel):
    key: str
    operator: str
    values: List[str] = Field(default_factory=list)


class LabelSelector(SpecModel):
    """Label query over a set of objects. An empty selector matches everything."""
    match_labels: Dict[str, str] = Field(default_factory=dict)
    match_expressions: List[LabelSelectorRequirement] = Field(default_factory=list)


class NamespaceSelector(SpecModel):
    """Namespaces to discover objects from.

    If `matchNames` is empty and `any` is false, only the namespace of the
    referencing object is used.
    """
    any: bool = False
    match_names: List[str] = Field(default_factory=list)


class RelabelConfig(SpecModel):
    """A single relabeling rule applied to targets or samples."""
    source_labels: List[str] = Field(default_factory=list)
    separator: str = ""
    target_label: str = ""
    regex: str = ""
    modulus: int = Field(default=0, ge=0)
    replacement: str = ""
    action: str = "replace"

    @field_validator("action")
    @classmethod
    def action_is_known(cls, v):
        """Ensure action is one of the relabel actions, in either case."""
        if v.lower() not in {
            "replace", "keep", "drop", "hashmod", "labelmap",
            "labeldrop", "labelkeep", "lowercase", "uppercase",
        }:
            raise ValueError(f"unknown relabel action {v!r}")
        return v


class ProbeTargetStaticConfig(SpecModel):
    """A static list of hosts to probe."""
    targets: List[str] = Field(default_factory=list, alias="static")
    labels: Dict[str, str] = Field(default_factory=dict)
    relabeling_configs: List[RelabelConfig] = Field(default_factory=list)


class ProbeTargetIngress(SpecModel):
    """Ingress objects to probe, one target per host/path combination."""
    selector: LabelSelector = Field(default_factory=LabelSelector)
    namespace_selector: NamespaceSelector = Field(default_factory=NamespaceSelector)
    relabeling_configs: List[RelabelConfig] = Field(default_factory=list)


class ProbeTargets(SpecModel):
    """Static or dynamically discovered probe targets. At least one source is required."""
    static_config: Optional[ProbeTargetStaticConfig] = None
    ingress: Optional[ProbeTargetIngress] = None

    def validate(self) -> None:
        """Reject a selection with no target source at all."""
        if self.static_config is None and self.ingress is None:
            raise NoTargetSourceError()

    def effective_source(self) -> Optional[str]:
        """Return the wire name of the source a config generator uses.

        When both are set, staticConfig takes precedence.
        """
        if self.static_config is not None:
            return "staticConfig"
        if self.ingress is not None:
            return "ingress"
        return None


@dataclass(frozen=True)
class GroupKind:
    """An API group and kind pair, e.g. ("monitoring.coreos.com", "Probe")."""
    group: str
    kind: str


@dataclass(frozen=True)
class GroupResource:
    """An API group and resource name pair, e.g. ("monitoring.coreos.com", "probes")."""
    group: str
    resource: str


def resolve_kind(resource: str) -> str:
    """Return the kind for a resource name.

    Raises:
        UnmappedResourceError: if the name is not in RESOURCE_TO_KIND.
    """
    if resource not in RESOURCE_TO_KIND:
        raise UnmappedResourceError(f"failed to map resource {resource!r} to a kind")
    return RESOURCE_TO_KIND[resource]


class ObjectReference(SpecModel):
    """References a PodMonitor, ServiceMonitor, Probe or rule object.

    When `name` is empty, every object of the resource in the namespace
    matches.
    """
    group: str = ""
    resource: str
    namespace: str = Field(min_length=1)
    name: str = ""

    @field_validator("group")
    @classmethod
    def group_is_monitoring(cls, v):
        """Ensure group, when set, is the monitoring API group."""
        if v and v != GROUP_NAME:
            raise ValueError(f'group must be "{GROUP_NAME}"')
        return v

    @field_validator("resource")
    @classmethod
    def resource_is_referenceable(cls, v):
        """Ensure resource is one of the referenceable resource names."""
        if v not in REFERENCEABLE_RESOURCES:
            raise ValueError(f"resource must be one of {sorted(REFERENCEABLE_RESOURCES)}")
        return v

    def get_group(self) -> str:
        # The API server default for group is not applied when parsing documents locally.
        return self.group or GROUP_NAME

    def group_resource(self) -> GroupResource:
        """Return the group and resource of the referent."""
        return GroupResource(group=self.get_group(), resource=self.resource)

    def group_kind(self) -> GroupKind:
        """Return the group and kind of the referent.

        Raises:
            UnmappedResourceError: if the resource has no known kind.
        """
        return GroupKind(group=self.get_group(), kind=resolve_kind(self.resource))


class PrometheusRuleExcludeConfig(SpecModel):
    """A rule object exempted from namespace label enforcement."""
    rule_namespace: str
    rule_name: str
