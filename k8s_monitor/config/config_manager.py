from functools import lru_cache
from typing import Optional

from k8s_monitor.config.constants import KUBECONFIG, DEFAULT_KUBECONFIG_PATH, POLL_INTERVAL_SEC, \
    DEFAULT_POLL_INTERVAL_SEC, PROVIDER_TIMEOUT_SEC
from k8s_monitor.config.env_property_provider import EnvPropertyProvider


class ConfigManager:

    def __init__(self, property_provider=EnvPropertyProvider()):
        self.__property_provider = property_provider

    def get_str(self, key, default=None) -> str:
        value = self.__property_provider.get(key)

        if value is None:
            return default
        else:
            return value

    def get_float(self, key, default=None) -> Optional[float]:
        value = self.get_str(key, default)
        if value is None:
            return None
        return float(value)

    @lru_cache(maxsize=None)
    def get_cached_str(self, key, default=None) -> str:
        return self.get_str(key, default)

    @lru_cache(maxsize=None)
    def get_cached_float(self, key, default=None) -> Optional[float]:
        return self.get_float(key, default)

    def get_poll_interval(self) -> float:
        return self.get_cached_float(POLL_INTERVAL_SEC, DEFAULT_POLL_INTERVAL_SEC)

    def get_provider_timeout(self) -> Optional[float]:
        return self.get_cached_float(PROVIDER_TIMEOUT_SEC)

    def get_kubeconfig_path(self, override: Optional[str] = None) -> str:
        if override is not None:
            return override
        return self.get_cached_str(KUBECONFIG, DEFAULT_KUBECONFIG_PATH)
