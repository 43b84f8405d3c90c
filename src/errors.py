# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Exceptions raised when a monitoring specification is semantically invalid.

Every validator raises the error of the first rule it finds violated.
Each class carries a static default message so callers can surface
``str(err)`` to the user as-is.
"""

from typing import Optional


class SpecValidationError(ValueError):
    """Base exception for all rejected specifications.

    Callers treat any subclass as "this specification is invalid" and
    report it without attempting partial acceptance.
    """

    default_message = "invalid specification"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class SecretOrConfigMapError(SpecValidationError):
    """Raised for an invalid secret-or-configmap selector."""


class ConflictingReferenceError(SecretOrConfigMapError):
    """Raised when both the secret and the configMap forms are set."""

    default_message = "SecretOrConfigMap can not specify both secret and configMap"


class TLSConfigError(SpecValidationError):
    """Raised for an invalid TLS parameter set."""

    default_message = "invalid tls config"


class InvalidCAError(TLSConfigError):
    default_message = "tls config CA is invalid"


class InvalidCertError(TLSConfigError):
    default_message = "tls config Cert is invalid"


class MissingKeyError(TLSConfigError):
    default_message = "client cert specified without client key"


class MissingCertError(TLSConfigError):
    default_message = "client key specified without client cert"


class ConflictingCAError(TLSConfigError):
    default_message = "tls config can not both specify caFile and ca"


class ConflictingCertError(TLSConfigError):
    default_message = "tls config can not both specify certFile and cert"


class ConflictingKeyError(TLSConfigError):
    default_message = "tls config can not both specify keyFile and keySecret"


class IncompleteCertKeyPairError(TLSConfigError):
    """Raised when the merged reference and file view has a cert without a key, or a key without a cert.

    Attributes:
        missing: The absent side of the pair, either ``"key"`` or ``"cert"``.
    """

    def __init__(self, missing: str):
        self.missing = missing
        present = "cert" if missing == "key" else "key"
        super().__init__(f"tls config can not specify client {present} without client {missing}")


class WebTLSConfigError(SpecValidationError):
    """Raised for an invalid web server TLS parameter set."""

    default_message = "invalid web tls config"


class OAuth2Error(SpecValidationError):
    """Raised for an invalid OAuth2 client-credentials descriptor."""

    default_message = "invalid OAuth2 config"


class MissingTokenURLError(OAuth2Error):
    default_message = "OAuth2 token url must be specified"


class MissingClientIDError(OAuth2Error):
    default_message = "OAuth2 client id must be specified"


class InvalidClientIDError(OAuth2Error):
    default_message = "invalid OAuth2 client id"


class AuthorizationError(SpecValidationError):
    """Raised for an invalid Authorization header descriptor."""

    default_message = "invalid authorization config"


class ReservedTypeError(AuthorizationError):
    """Raised when the authorization type is "basic".

    Basic authentication has its own ``basicAuth`` section; the
    authorization section only carries bearer or custom schemes.
    """

    default_message = 'Authorization type cannot be set to "basic", use "basicAuth" instead'


class MissingCredentialsError(AuthorizationError):
    default_message = "Authorization credentials are required"


class ConflictingCredentialsError(AuthorizationError):
    default_message = "Authorization can not specify both credentials and credentialsFile"


class ProbeTargetsError(SpecValidationError):
    """Raised for an invalid probe target selection."""


class NoTargetSourceError(ProbeTargetsError):
    default_message = "at least one of .spec.targets.staticConfig and .spec.targets.ingress is required"


class DocumentError(SpecValidationError):
    """Raised when a document can not be turned into a monitoring resource.

    This can occur when:
    - The file does not exist
    - The text is not valid YAML
    - The YAML is not a mapping or names an unknown kind
    """

    default_message = "invalid document"


class UnmappedResourceError(RuntimeError):
    """Raised when a resource name has no entry in the resource-to-kind table.

    This is an internal consistency fault, not a user error: the names an
    ObjectReference accepts and RESOURCE_TO_KIND have drifted apart. It sits outside
    the SpecValidationError hierarchy and must not be caught.
    """
