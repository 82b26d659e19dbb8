import os

LOG_FMT_STRING = '%(asctime)s,%(msecs)d %(levelname)s %(process)d [%(filename)s:%(lineno)d] %(message)s'
LOG_DATE_FMT_STRING = '%d-%m-%Y:%H:%M:%S'

DEFAULT_NAMESPACE = 'default'

# Kubernetes client
KUBECONFIG = 'KUBECONFIG'
DEFAULT_KUBECONFIG_PATH = os.path.join('~', '.kube', 'config')

# Monitor loop
POLL_INTERVAL_SEC = 'K8S_MONITOR_POLL_INTERVAL_SEC'
DEFAULT_POLL_INTERVAL_SEC = 5

# Unset means metrics requests are not bounded
PROVIDER_TIMEOUT_SEC = 'K8S_MONITOR_PROVIDER_TIMEOUT_SEC'
