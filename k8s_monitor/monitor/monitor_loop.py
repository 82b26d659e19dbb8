from typing import Optional

from k8s_monitor import log
from k8s_monitor.config.constants import DEFAULT_POLL_INTERVAL_SEC
from k8s_monitor.context import Context
from k8s_monitor.model.usage import aggregate_usage
from k8s_monitor.model.workload import WorkloadIdentity
from k8s_monitor.monitor.observation_sink import ObservationSink
from k8s_monitor.monitor.usage_provider import UsageProvider

TICK_COUNT = 'tick_count'
OBSERVATION_COUNT = 'observation_count'
FAILURE_COUNT = 'failure_count'
CONSECUTIVE_FAILURE_COUNT = 'consecutive_failure_count'


class MonitorLoop:
    """
    Polls the usage of a single workload every interval and reports the totals to a sink until the context passed
    to run() is cancelled.  Provider failures are reported and skipped, they never stop the loop.
    """

    def __init__(self,
                 identity: WorkloadIdentity,
                 usage_provider: UsageProvider,
                 sink: ObservationSink,
                 interval_sec: float = DEFAULT_POLL_INTERVAL_SEC,
                 provider_timeout_sec: Optional[float] = None):
        if interval_sec is None or interval_sec <= 0:
            raise ValueError("Poll interval must be positive, got: {}".format(interval_sec))
        if provider_timeout_sec is not None and provider_timeout_sec <= 0:
            raise ValueError("Provider timeout must be positive, got: {}".format(provider_timeout_sec))

        self.__identity = identity
        self.__usage_provider = usage_provider
        self.__sink = sink
        self.__interval_sec = interval_sec
        self.__provider_timeout_sec = provider_timeout_sec

        self.__tick_count = 0
        self.__observation_count = 0
        self.__failure_count = 0
        self.__consecutive_failure_count = 0

    def run(self, ctx: Context) -> Exception:
        log.info("Monitoring pod: %s every %s seconds using: %s",
                 self.__identity, self.__interval_sec, self.__usage_provider.get_name())

        while True:
            if ctx.wait(self.__interval_sec):
                return self.__stop(ctx)

            if not self.__tick(ctx):
                return self.__stop(ctx)

    def get_stats(self) -> dict:
        return {
            TICK_COUNT: self.__tick_count,
            OBSERVATION_COUNT: self.__observation_count,
            FAILURE_COUNT: self.__failure_count,
            CONSECUTIVE_FAILURE_COUNT: self.__consecutive_failure_count
        }

    def __tick(self, ctx: Context) -> bool:
        """Returns False if the context was cancelled while the provider was being queried."""
        self.__tick_count += 1

        with ctx.with_timeout(self.__provider_timeout_sec) as call_ctx:
            try:
                snapshot = self.__usage_provider.get_usage(call_ctx, self.__identity)
            except Exception as e:
                if ctx.is_cancelled():
                    return False
                self.__failure_count += 1
                self.__consecutive_failure_count += 1
                log.debug("Consecutive usage failures for pod: %s: %d",
                          self.__identity, self.__consecutive_failure_count)
                self.__sink.failure(self.__identity, e)
                return True

        if ctx.is_cancelled():
            return False

        self.__consecutive_failure_count = 0
        self.__observation_count += 1
        self.__sink.observe(self.__identity, aggregate_usage(snapshot))
        return True

    def __stop(self, ctx: Context) -> Exception:
        cause = ctx.err()
        log.info("Stopped monitoring pod: %s, cause: %s", self.__identity, cause)
        return cause
