#!/usr/bin/env python3
import logging
import sys

import click

from k8s_monitor import log
from k8s_monitor.config.config_manager import ConfigManager
from k8s_monitor.config.constants import DEFAULT_NAMESPACE
from k8s_monitor.config.env_property_provider import EnvPropertyProvider
from k8s_monitor.constants import PROVIDER_INIT_FAILURE_EXIT_CODE
from k8s_monitor.context import Context
from k8s_monitor.model.workload import WorkloadIdentity
from k8s_monitor.monitor.metrics_usage_provider import KubernetesMetricsUsageProvider
from k8s_monitor.monitor.monitor_loop import MonitorLoop
from k8s_monitor.monitor.observation_sink import LogObservationSink
from k8s_monitor.monitor.usage_provider import ProviderInitError
from k8s_monitor.real_exit_handler import RealExitHandler
from k8s_monitor.signal_handler import CancellingSignalHandler
from k8s_monitor.utils import config_logs

POSITIVE_SECONDS = click.FloatRange(min=0, min_open=True)


def get_positive_setting(name, value):
    if value is None or value <= 0:
        raise click.UsageError("{} must be a positive number of seconds, got: {}".format(name, value))
    return value


@click.command(name="k8s-monitor", help="Monitor the CPU and memory usage of a Kubernetes Pod")
@click.option('--pod', '-p', required=True, help="Name of the pod to monitor")
@click.option('--namespace', '-n', default=DEFAULT_NAMESPACE, help="Namespace of the pod (default: default)")
@click.option('--interval', type=POSITIVE_SECONDS, help="Seconds between metrics polls (default: 5)")
@click.option('--timeout', type=POSITIVE_SECONDS, help="Seconds to wait for each metrics request (default: none)")
@click.option('--kubeconfig', help="Path to the kubeconfig file (default: $KUBECONFIG or ~/.kube/config)")
@click.option('--debug', is_flag=True, default=False, help="Enable debug logging")
def main(pod, namespace, interval, timeout, kubeconfig, debug):
    config_logs(logging.DEBUG if debug else logging.INFO)
    config_manager = ConfigManager(EnvPropertyProvider())

    try:
        if interval is None:
            interval = get_positive_setting("Poll interval", config_manager.get_poll_interval())
        if timeout is None:
            timeout = config_manager.get_provider_timeout()
            if timeout is not None:
                timeout = get_positive_setting("Provider timeout", timeout)
    except ValueError as e:
        raise click.UsageError("Invalid monitor configuration: {}".format(e))

    try:
        identity = WorkloadIdentity(pod, namespace)
    except ValueError as e:
        raise click.UsageError(str(e))

    log.info("Setting up the Kubernetes metrics client...")
    try:
        usage_provider = KubernetesMetricsUsageProvider.from_kubeconfig(config_manager.get_kubeconfig_path(kubeconfig))
    except ProviderInitError as e:
        log.error("Failed to initialize the Kubernetes metrics client: %s", e)
        sys.exit(PROVIDER_INIT_FAILURE_EXIT_CODE)

    ctx = Context()
    CancellingSignalHandler(ctx, RealExitHandler()).install()

    monitor_loop = MonitorLoop(identity, usage_provider, LogObservationSink(log), interval, timeout)
    cause = monitor_loop.run(ctx)
    log.info("Monitor stopped: %s, stats: %s", cause, monitor_loop.get_stats())


if __name__ == "__main__":
    main()
