from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from huno.core.config import Settings
from huno.db.base import Base

# users 테이블 등록
import huno.db.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    # 우선순위: alembic -x dburl=... > 앱 설정(DATABASE_URL / .env)
    x_args = context.get_x_argument(as_dictionary=True)
    url = x_args.get("dburl") or Settings().DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL is not set (env, .env or `alembic -x dburl=...`)")
    return url


config.set_main_option("sqlalchemy.url", _database_url())
target_metadata = Base.metadata


def _configure_kwargs(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # sqlite 는 ALTER 제약이 있어 batch 모드로
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs(str(connectable.url)))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
