"""Check that the mapping store configured in your environment is usable

Reads the same configuration as the service (environment variables and the
optional LINKVAULT_CONFIG_FILE document), opens the store, loads the key and
runs one health probe.

Expect to see "healthy" printed in your local console; the exit status is 1
when the store is unhealthy and 2 when the service could not start at all
(corrupt store, missing key, bad configuration).
"""

import sys

from linkvault.application import bootstrap
from linkvault.dao.exceptions import DataStoreError
from linkvault.exceptions import ConfigurationError
from linkvault.utils import initialize_logging


def main() -> int:
    initialize_logging()
    try:
        app = bootstrap()
    except (ConfigurationError, DataStoreError) as e:
        print(f'cannot start: {e}', file=sys.stderr)
        return 2

    with app:
        status = app.health.check()

    if status.healthy:
        print('healthy')
        return 0
    print(f'unhealthy: {status.reason}')
    return 1


if __name__ == '__main__':
    sys.exit(main())
