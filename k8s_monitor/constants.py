PROVIDER_INIT_FAILURE_EXIT_CODE = 1

# A second termination signal during shutdown exits with 128 + <signal number>
FORCED_EXIT_CODE_BASE = 128
