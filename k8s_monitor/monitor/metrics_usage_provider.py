import kubernetes
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from k8s_monitor import log
from k8s_monitor.context import Context
from k8s_monitor.model.quantity import Quantity, zero_quantity
from k8s_monitor.model.usage import UsageSnapshot, ContainerUsage
from k8s_monitor.model.workload import WorkloadIdentity
from k8s_monitor.monitor.usage_provider import UsageProvider, UsageProviderError, ProviderInitError

METRICS_GROUP = 'metrics.k8s.io'
METRICS_VERSION = 'v1beta1'
POD_METRICS_PLURAL = 'pods'

METADATA = 'metadata'
NAME = 'name'
CONTAINERS = 'containers'
USAGE = 'usage'
CPU = 'cpu'
MEMORY = 'memory'
TIMESTAMP = 'timestamp'


def parse_usage_quantity(usage: dict, resource: str) -> Quantity:
    # Resources missing from a container's usage count as zero
    raw = usage.get(resource, None)
    if raw is None:
        return zero_quantity()
    return Quantity.parse(raw)


def parse_container_usage(container: dict) -> ContainerUsage:
    usage = container.get(USAGE, None) or {}
    return ContainerUsage(
        name=container.get(NAME, ''),
        cpu=parse_usage_quantity(usage, CPU),
        memory=parse_usage_quantity(usage, MEMORY))


def parse_pod_metrics(pod_metrics: dict, identity: WorkloadIdentity) -> UsageSnapshot:
    # {
    #     "kind": "PodMetrics",
    #     "apiVersion": "metrics.k8s.io/v1beta1",
    #     "metadata": {
    #         "name": "web-1",
    #         "namespace": "default",
    #         ...
    #     },
    #     "timestamp": "2024-05-01T10:00:00Z",
    #     "window": "30s",
    #     "containers": [{
    #         "name": "app",
    #         "usage": {
    #             "cpu": "100m",
    #             "memory": "64Mi"
    #         }
    #     }, ...]
    # }
    if not isinstance(pod_metrics, dict):
        raise UsageProviderError("Unexpected pod metrics response type: {}".format(type(pod_metrics).__name__))

    metadata = pod_metrics.get(METADATA, None) or {}
    workload_name = metadata.get(NAME, identity.name)

    containers = pod_metrics.get(CONTAINERS, None) or []
    try:
        container_usages = [parse_container_usage(c) for c in containers]
    except (ValueError, TypeError, AttributeError) as e:
        raise UsageProviderError("Failed to parse pod metrics for {}: {}".format(identity, e)) from e

    return UsageSnapshot(workload_name, container_usages, pod_metrics.get(TIMESTAMP, None))


class KubernetesMetricsUsageProvider(UsageProvider):
    """Reads pod usage from the Kubernetes resource metrics API (served by metrics-server)."""

    def __init__(self, custom_api):
        self.__custom_api = custom_api

    @staticmethod
    def from_kubeconfig(config_file: str) -> 'KubernetesMetricsUsageProvider':
        log.info("Loading Kubernetes client configuration from: %s", config_file)
        try:
            api_client = kubernetes.config.new_client_from_config(config_file=config_file)
        except Exception as e:
            raise ProviderInitError("Failed to load Kubernetes configuration from '{}': {}".format(config_file, e)) from e

        return KubernetesMetricsUsageProvider(kubernetes.client.CustomObjectsApi(api_client))

    def get_usage(self, ctx: Context, identity: WorkloadIdentity) -> UsageSnapshot:
        if ctx.is_cancelled():
            raise UsageProviderError("Not requesting pod metrics for {}: {}".format(identity, ctx.err()))

        log.debug("Getting pod metrics for: %s", identity)
        try:
            pod_metrics = self.__custom_api.get_namespaced_custom_object(
                group=METRICS_GROUP,
                version=METRICS_VERSION,
                namespace=identity.namespace,
                plural=POD_METRICS_PLURAL,
                name=identity.name,
                _request_timeout=ctx.remaining())
        except ApiException as e:
            raise UsageProviderError(
                "Metrics API request for {} failed with status: {}, reason: {}".format(identity, e.status, e.reason)) from e
        except HTTPError as e:
            raise UsageProviderError("Metrics API request for {} failed: {}".format(identity, e)) from e

        snapshot = parse_pod_metrics(pod_metrics, identity)
        log.debug("Got pod metrics: %s", snapshot.to_dict())
        return snapshot
