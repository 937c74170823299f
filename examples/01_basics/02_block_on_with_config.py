"""
An example that reduces from synchronous code and configures logging from YAML.
"""
from pathlib import Path

from streamreduce import block_on, configure_logging_from, load_config, reduce

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default.yml"


async def concat(acc: str, item: str) -> str:
    return f"{acc}-{item}"


def main():
    config = load_config(str(CONFIG_PATH))
    configure_logging_from(config)
    print(f"--- Logging configured at level {config.get('logging.level')} ---")

    result = block_on(reduce(["a", "b", "c"], concat))
    print(f"Result: {result}")


if __name__ == "__main__":
    main()
