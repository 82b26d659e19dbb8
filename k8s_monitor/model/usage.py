from typing import List, Optional

from k8s_monitor.model.quantity import Quantity, zero_quantity

NAME = 'name'
CPU = 'cpu'
MEMORY = 'memory'
TOTAL_CPU = 'total_cpu'
TOTAL_MEMORY = 'total_memory'
CONTAINERS = 'containers'
TIMESTAMP = 'timestamp'


class ContainerUsage:

    def __init__(self, name: str, cpu: Quantity, memory: Quantity):
        self.name = name
        self.cpu = cpu
        self.memory = memory

    def to_dict(self) -> dict:
        return {
            NAME: self.name,
            CPU: str(self.cpu),
            MEMORY: str(self.memory)
        }

    def __str__(self):
        return str(self.to_dict())


class UsageSnapshot:

    def __init__(self, workload_name: str, containers: List[ContainerUsage], timestamp: Optional[str] = None):
        self.workload_name = workload_name
        self.containers = list(containers)
        self.timestamp = timestamp

    def to_dict(self) -> dict:
        return {
            NAME: self.workload_name,
            TIMESTAMP: self.timestamp,
            CONTAINERS: [c.to_dict() for c in self.containers]
        }


class AggregatedUsage:

    def __init__(self, workload_name: str, total_cpu: Quantity, total_memory: Quantity, container_count: int):
        self.workload_name = workload_name
        self.total_cpu = total_cpu
        self.total_memory = total_memory
        self.container_count = container_count

    def to_dict(self) -> dict:
        return {
            NAME: self.workload_name,
            TOTAL_CPU: str(self.total_cpu),
            TOTAL_MEMORY: str(self.total_memory),
            CONTAINERS: self.container_count
        }

    def __str__(self):
        return str(self.to_dict())


def aggregate_usage(snapshot: UsageSnapshot) -> AggregatedUsage:
    total_cpu = zero_quantity()
    total_memory = zero_quantity()

    for container in snapshot.containers:
        total_cpu += container.cpu
        total_memory += container.memory

    return AggregatedUsage(snapshot.workload_name, total_cpu, total_memory, len(snapshot.containers))
