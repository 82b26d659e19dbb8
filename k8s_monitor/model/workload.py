from collections import namedtuple

from k8s_monitor.config.constants import DEFAULT_NAMESPACE


class WorkloadIdentity(namedtuple('WorkloadIdentity', ['name', 'namespace'])):
    """The pod being monitored.  Fixed for the lifetime of the process."""
    __slots__ = ()

    def __new__(cls, name: str, namespace: str = DEFAULT_NAMESPACE):
        if name is None or len(name) == 0:
            raise ValueError("Workload name is required")
        if namespace is None or len(namespace) == 0:
            raise ValueError("Workload namespace is required")
        return super().__new__(cls, name, namespace)

    def __str__(self):
        return "{}/{}".format(self.namespace, self.name)
