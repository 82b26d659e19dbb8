import logging

from k8s_monitor.config.constants import LOG_FMT_STRING, LOG_DATE_FMT_STRING


def config_logs(level=logging.INFO):
    logging.basicConfig(
        format=LOG_FMT_STRING,
        datefmt=LOG_DATE_FMT_STRING,
        level=level)
