import logging
import time

from k8s_monitor.config.constants import LOG_FMT_STRING

DEFAULT_TIMEOUT_SECONDS = 3
DEFAULT_TEST_POD_NAME = 'web-1'
DEFAULT_TEST_NAMESPACE = 'default'
DEFAULT_TEST_INTERVAL_SEC = 0.01


def wait_until(func, timeout=DEFAULT_TIMEOUT_SECONDS, period=0.01):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if func():
            return
        time.sleep(period)

    raise TimeoutError(
        "Function did not succeed within timeout: '{}'.".format(timeout))


def config_logs(level):
    logging.basicConfig(
        format=LOG_FMT_STRING,
        datefmt='%d-%m-%Y:%H:%M:%S',
        level=level)


def get_test_container_metrics(name, cpu=None, memory=None) -> dict:
    usage = {}
    if cpu is not None:
        usage['cpu'] = cpu
    if memory is not None:
        usage['memory'] = memory

    return {
        'name': name,
        'usage': usage
    }


def get_test_pod_metrics(containers, name=DEFAULT_TEST_POD_NAME, namespace=DEFAULT_TEST_NAMESPACE) -> dict:
    return {
        'kind': 'PodMetrics',
        'apiVersion': 'metrics.k8s.io/v1beta1',
        'metadata': {
            'name': name,
            'namespace': namespace,
            'creationTimestamp': '2024-05-01T10:00:03Z'
        },
        'timestamp': '2024-05-01T10:00:00Z',
        'window': '30s',
        'containers': containers
    }
