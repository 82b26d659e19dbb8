from abc import abstractmethod

from k8s_monitor import log
from k8s_monitor.model.usage import AggregatedUsage, NAME
from k8s_monitor.model.workload import WorkloadIdentity

OBSERVATION = 'observation'
NAMESPACE = 'namespace'
ERROR = 'error'


class ObservationSink:

    @abstractmethod
    def observe(self, identity: WorkloadIdentity, usage: AggregatedUsage):
        pass

    @abstractmethod
    def failure(self, identity: WorkloadIdentity, error: Exception):
        pass


class LogObservationSink(ObservationSink):
    """Reports each poll as a log record, with the record's fields attached under the 'observation' attribute."""

    def __init__(self, logger=log):
        self.__log = logger

    def observe(self, identity: WorkloadIdentity, usage: AggregatedUsage):
        fields = usage.to_dict()
        fields[NAMESPACE] = identity.namespace
        self.__log.info(
            "Pod metrics: pod=%s namespace=%s total_cpu=%s total_memory=%s containers=%d",
            usage.workload_name,
            identity.namespace,
            usage.total_cpu,
            usage.total_memory,
            usage.container_count,
            extra={OBSERVATION: fields})

    def failure(self, identity: WorkloadIdentity, error: Exception):
        fields = {
            NAME: identity.name,
            NAMESPACE: identity.namespace,
            ERROR: str(error)
        }
        self.__log.error("Failed to get pod metrics: pod=%s error=%s", identity, error, extra={OBSERVATION: fields})
