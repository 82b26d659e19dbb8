from threading import Lock

from k8s_monitor.model.usage import AggregatedUsage
from k8s_monitor.model.workload import WorkloadIdentity
from k8s_monitor.monitor.observation_sink import ObservationSink

OBSERVATION = 'observation'
FAILURE = 'failure'


class MockObservationSink(ObservationSink):

    def __init__(self):
        self.__lock = Lock()
        self.__events = []

    def observe(self, identity: WorkloadIdentity, usage: AggregatedUsage):
        with self.__lock:
            self.__events.append((OBSERVATION, identity, usage))

    def failure(self, identity: WorkloadIdentity, error: Exception):
        with self.__lock:
            self.__events.append((FAILURE, identity, error))

    def get_events(self):
        with self.__lock:
            return list(self.__events)

    def get_observations(self):
        return [e[2] for e in self.get_events() if e[0] == OBSERVATION]

    def get_failures(self):
        return [e[2] for e in self.get_events() if e[0] == FAILURE]
