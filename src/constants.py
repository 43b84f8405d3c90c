# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Monitoring API constants, for better testability."""

from types import MappingProxyType
from typing import Final, FrozenSet, Mapping

GROUP_NAME: Final[str] = "monitoring.coreos.com"
API_VERSION: Final[str] = f"{GROUP_NAME}/v1"

PROMETHEUSES_KIND: Final[str] = "Prometheus"
PROMETHEUS_NAME: Final[str] = "prometheuses"

ALERTMANAGERS_KIND: Final[str] = "Alertmanager"
ALERTMANAGER_NAME: Final[str] = "alertmanagers"

SERVICE_MONITORS_KIND: Final[str] = "ServiceMonitor"
SERVICE_MONITOR_NAME: Final[str] = "servicemonitors"

POD_MONITORS_KIND: Final[str] = "PodMonitor"
POD_MONITOR_NAME: Final[str] = "podmonitors"

PROMETHEUS_RULE_KIND: Final[str] = "CustomPrometheusRule"
PROMETHEUS_RULE_NAME: Final[str] = "customprometheusrules"

PROBES_KIND: Final[str] = "Probe"
PROBE_NAME: Final[str] = "probes"

RESOURCE_TO_KIND: Final[Mapping[str, str]] = MappingProxyType({
    PROMETHEUS_NAME: PROMETHEUSES_KIND,
    ALERTMANAGER_NAME: ALERTMANAGERS_KIND,
    SERVICE_MONITOR_NAME: SERVICE_MONITORS_KIND,
    POD_MONITOR_NAME: POD_MONITORS_KIND,
    PROMETHEUS_RULE_NAME: PROMETHEUS_RULE_KIND,
    PROBE_NAME: PROBES_KIND,
})

# Resources an ObjectReference may point at. Every entry must be a key of RESOURCE_TO_KIND.
# Rules are referenced as "customprometheusrules"; references using the upstream
# CRD name "prometheusrules" are not accepted.
REFERENCEABLE_RESOURCES: Final[FrozenSet[str]] = frozenset({
    PROMETHEUS_RULE_NAME,
    SERVICE_MONITOR_NAME,
    POD_MONITOR_NAME,
    PROBE_NAME,
})

RESERVED_AUTHORIZATION_TYPE: Final[str] = "basic"
DEFAULT_PROBE_PATH: Final[str] = "/probe"

STATUS_ACCEPTED: Final[str] = "accepted"
STATUS_REJECTED: Final[str] = "rejected"
