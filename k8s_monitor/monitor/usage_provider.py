from abc import abstractmethod

from k8s_monitor.context import Context
from k8s_monitor.model.usage import UsageSnapshot
from k8s_monitor.model.workload import WorkloadIdentity


class ProviderInitError(Exception):
    pass


class UsageProviderError(Exception):
    pass


class UsageProvider:

    @abstractmethod
    def get_usage(self, ctx: Context, identity: WorkloadIdentity) -> UsageSnapshot:
        pass

    def get_name(self) -> str:
        return self.__class__.__name__
