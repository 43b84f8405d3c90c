# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Monitoring resources: service and pod scrape targets, probes and rule groups.

These are mostly flat records. Their `validate()` walks the nested
credential sections in field order and lets the first failure propagate.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from constants import (
    API_VERSION,
    DEFAULT_PROBE_PATH,
    POD_MONITORS_KIND,
    PROBES_KIND,
    PROMETHEUS_RULE_KIND,
    SERVICE_MONITORS_KIND,
)
from models import (
    BasicAuth,
    LabelSelector,
    NamespaceSelector,
    OAuth2,
    ProbeTargets,
    RelabelConfig,
    SafeAuthorization,
    SafeTLSConfig,
    SecretKeySelector,
    SpecModel,
    TLSConfig,
)


class _ScrapeEndpoint(SpecModel):
    """Fields shared by service and pod scrape endpoints."""
    port: str = ""
    target_port: Optional[Union[int, str]] = None
    path: str = ""
    scheme: str = ""
    params: Dict[str, List[str]] = Field(default_factory=dict)
    interval: str = ""
    scrape_timeout: str = ""
    tls_config: Optional[SafeTLSConfig] = None
    bearer_token_secret: Optional[SecretKeySelector] = None
    authorization: Optional[SafeAuthorization] = None
    honor_labels: bool = False
    honor_timestamps: Optional[bool] = None
    basic_auth: Optional[BasicAuth] = None
    oauth2: Optional[OAuth2] = None
    metric_relabel_configs: List[RelabelConfig] = Field(default_factory=list, alias="metricRelabelings")
    relabel_configs: List[RelabelConfig] = Field(default_factory=list, alias="relabelings")
    proxy_url: Optional[str] = None
    follow_redirects: Optional[bool] = None
    enable_http2: Optional[bool] = None

    @field_validator("scheme")
    @classmethod
    def scheme_is_http(cls, v):
        """Ensure scheme, when set, is http or https."""
        if v and v not in ("http", "https"):
            raise ValueError('scheme must be "http" or "https"')
        return v

    def validate(self) -> None:
        """Validate the TLS, authorization and OAuth2 sections that are set."""
        for section in (self.tls_config, self.authorization, self.oauth2):
            if section is not None:
                section.validate()


class Endpoint(_ScrapeEndpoint):
    """A scrapeable endpoint of a Service.

    Service endpoints may read TLS material and the bearer token from
    files in the scraper's container.
    """
    tls_config: Optional[TLSConfig] = None  # type: ignore[assignment]
    bearer_token_file: str = ""


class PodMetricsEndpoint(_ScrapeEndpoint):
    """A scrapeable endpoint of a Pod. TLS material must come from Secrets or ConfigMaps."""
    filter_running: Optional[bool] = None


class _MonitorSpec(SpecModel):
    job_label: str = ""
    pod_target_labels: List[str] = Field(default_factory=list)
    selector: LabelSelector = Field(default_factory=LabelSelector)
    namespace_selector: NamespaceSelector = Field(default_factory=NamespaceSelector)
    sample_limit: int = Field(default=0, ge=0)
    target_limit: int = Field(default=0, ge=0)
    label_limit: int = Field(default=0, ge=0)
    label_name_length_limit: int = Field(default=0, ge=0)
    label_value_length_limit: int = Field(default=0, ge=0)


class ServiceMonitorSpec(_MonitorSpec):
    """Service selection and scrape endpoints of a ServiceMonitor."""
    target_labels: List[str] = Field(default_factory=list)
    endpoints: List[Endpoint] = Field(default_factory=list)

    def validate(self) -> None:
        for endpoint in self.endpoints:
            endpoint.validate()


class AttachMetadata(SpecModel):
    node: bool = False


class PodMonitorSpec(_MonitorSpec):
    """Pod selection and scrape endpoints of a PodMonitor."""
    pod_metrics_endpoints: List[PodMetricsEndpoint] = Field(default_factory=list)
    attach_metadata: Optional[AttachMetadata] = None

    def validate(self) -> None:
        for endpoint in self.pod_metrics_endpoints:
            endpoint.validate()


class ProberSpec(SpecModel):
    """Where the prober (e.g. a blackbox exporter) is reached."""
    url: str = Field(min_length=1)
    scheme: str = ""
    path: str = DEFAULT_PROBE_PATH
    proxy_url: str = ""


class ProbeSpec(SpecModel):
    """Targets, prober and credentials of a Probe."""
    job_name: str = ""
    prober: Optional[ProberSpec] = None
    module: str = ""
    targets: ProbeTargets = Field(default_factory=ProbeTargets)
    interval: str = ""
    scrape_timeout: str = ""
    tls_config: Optional[SafeTLSConfig] = None
    bearer_token_secret: Optional[SecretKeySelector] = None
    basic_auth: Optional[BasicAuth] = None
    oauth2: Optional[OAuth2] = None
    metric_relabel_configs: List[RelabelConfig] = Field(default_factory=list, alias="metricRelabelings")
    authorization: Optional[SafeAuthorization] = None
    sample_limit: int = Field(default=0, ge=0)
    target_limit: int = Field(default=0, ge=0)
    label_limit: int = Field(default=0, ge=0)
    label_name_length_limit: int = Field(default=0, ge=0)
    label_value_length_limit: int = Field(default=0, ge=0)

    def validate(self) -> None:
        """Validate the target selection first, then every credential section that is set."""
        self.targets.validate()
        for section in (self.tls_config, self.authorization, self.oauth2):
            if section is not None:
                section.validate()


class Rule(SpecModel):
    """An alerting or recording rule. Only one of `record` and `alert` should be set."""
    record: str = ""
    alert: str = ""
    expr: Union[int, str]
    for_: str = Field(default="", alias="for")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class RuleGroup(SpecModel):
    """A list of sequentially evaluated rules."""
    name: str = Field(min_length=1)
    interval: str = ""
    rules: List[Rule] = Field(default_factory=list)
    partial_response_strategy: str = Field(
        default="", alias="partial_response_strategy", pattern=r"^(?i)(abort|warn)?$"
    )


class PrometheusRuleSpec(SpecModel):
    groups: List[RuleGroup] = Field(default_factory=list)

    @field_validator("groups")
    @classmethod
    def group_names_are_unique(cls, v):
        """Ensure no two groups share a name."""
        names = [group.name for group in v]
        if len(names) != len(set(names)):
            raise ValueError("rule group names must be unique")
        return v

    def validate(self) -> None:
        """Rule groups carry no credentials, so parsing already checked everything."""


class Resource(SpecModel):
    """A top-level document. Metadata is kept as an opaque mapping."""
    api_version: str = API_VERSION
    kind: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.metadata.get("name") or "")

    @property
    def namespace(self) -> str:
        return str(self.metadata.get("namespace") or "")


class ServiceMonitor(Resource):
    kind: str = SERVICE_MONITORS_KIND
    spec: ServiceMonitorSpec

    def validate(self) -> None:
        self.spec.validate()


class PodMonitor(Resource):
    kind: str = POD_MONITORS_KIND
    spec: PodMonitorSpec

    def validate(self) -> None:
        self.spec.validate()


class Probe(Resource):
    kind: str = PROBES_KIND
    spec: ProbeSpec

    def validate(self) -> None:
        self.spec.validate()


class PrometheusRule(Resource):
    kind: str = PROMETHEUS_RULE_KIND
    spec: PrometheusRuleSpec

    def validate(self) -> None:
        self.spec.validate()
