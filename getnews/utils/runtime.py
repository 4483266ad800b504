"""Detect whether a handler runs on a developer machine

Under `sam local` (or with APP_ENV=local) getnews trades production behavior
for visibility: `guarantee_500_response` re-raises instead of answering 500,
and `load_config` may read AppConfig from a local agent.

An unset APP_ENV does not count as local, so a misconfigured deployment
never leaks tracebacks.

Example:
    >>> os.environ['APP_ENV'] = 'prod'
    >>> os.environ['AWS_SAM_LOCAL'] = 'true'
    >>> running_locally()
    True
"""

import os

from getnews.constants import ENV


LOCAL_APP_ENV = 'local'


def running_locally() -> bool:
    if os.getenv(ENV.App.APP_ENV, '').lower() == LOCAL_APP_ENV:
        return True
    # SAM CLI sets AWS_SAM_LOCAL=true inside its containers
    return os.getenv(ENV.App.AWS_SAM_LOCAL, '').lower() == 'true'
