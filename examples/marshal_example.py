"""Minimal example rendering a settings dataclass as environment entries."""

import subprocess
import sys
from dataclasses import dataclass

from kv_env import env_field, marshal, marshal_to_environ


@dataclass
class Worker:
    queue: str = env_field("WORKER_QUEUE", default="default")
    concurrency: int = env_field("WORKER_CONCURRENCY", default=4)
    tags: list[str] = env_field("WORKER_TAGS", default_factory=lambda: ["blue", "green"])
    region: str | None = env_field("WORKER_REGION", default=None)


def main() -> None:
    """Print the key set and pass it to a child process."""
    worker = Worker(queue="emails")
    print("keyset:", marshal(worker))

    environ = dict(entry.split("=", 1) for entry in marshal_to_environ(worker))
    _ = subprocess.run(
        [sys.executable, "-c", "import os; print(os.environ['WORKER_TAGS'])"],
        env=environ,
        check=True,
    )


if __name__ == "__main__":
    main()
