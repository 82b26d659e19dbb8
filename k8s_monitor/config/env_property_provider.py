import os

from k8s_monitor.config.property_provider import PropertyProvider


class EnvPropertyProvider(PropertyProvider):

    def get(self, key):
        value = os.environ.get(key, None)
        if value is None or value.strip() == '':
            return None
        return value.strip()
