"""
Environment Configuration Example

QUICKFIRE_* variables (or a .env file) configure the client:

    QUICKFIRE_BASE_URL=https://jsonplaceholder.typicode.com
    QUICKFIRE_TIMEOUT=15
    QUICKFIRE_DEBUG=true
    QUICKFIRE_LOG_ENABLED=true
    QUICKFIRE_LOG_LEVEL=DEBUG
    QUICKFIRE_LOG_FORMAT=json
"""

from src.quickfire import NetworkManager, RequestSpec, set_default_config
from src.quickfire.core.env_config import load_all_from_env, print_config_summary


if __name__ == "__main__":
    config, logging_config = load_all_from_env()
    print_config_summary(config)
    set_default_config(config)

    with NetworkManager(logging=logging_config) as manager:
        users = RequestSpec("GET /users").execute(manager=manager).wait(timeout=config.timeout)
        print(f"{len(users)} users")
