"""Minimal example populating a settings dataclass from the process environment."""

from dataclasses import dataclass, field

from kv_env import env_field, unmarshal_from_environ


@dataclass
class Database:
    host: str = env_field("DB_HOST", default="localhost")
    port: int = env_field("DB_PORT", default=5432)


@dataclass
class Settings:
    name: str = env_field("APP_NAME", default="demo")
    debug: bool = env_field("APP_DEBUG", default=False)
    allowed_hosts: list[str] = env_field("APP_ALLOWED_HOSTS", default_factory=list)
    database: Database = field(default_factory=Database)


def main() -> None:
    """Load settings from a fixed environ and report what was left over."""
    settings = Settings()
    remainder = unmarshal_from_environ(
        settings,
        ["APP_NAME=api", "APP_DEBUG=true", "APP_ALLOWED_HOSTS=a.example,b.example", "DB_PORT=6543", "HOME=/root"],
    )
    print(f"{settings=}")
    print("unconsumed:", remainder)


if __name__ == "__main__":
    main()
