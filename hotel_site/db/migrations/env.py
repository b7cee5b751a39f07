from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

# -----------------------------
# Import SQLAlchemy Base + Models
# -----------------------------
from hotel_site.core.config import DATABASE_URL
from hotel_site.db.session import Base
from hotel_site.models.user import User, UserRole  # noqa: F401
from hotel_site.models.profile import Profile  # noqa: F401
from hotel_site.models.room import Room  # noqa: F401
from hotel_site.models.facility import Facility  # noqa: F401
from hotel_site.models.service import Service  # noqa: F401
from hotel_site.models.review import Review  # noqa: F401
from hotel_site.models.footer_logo import FooterLogo  # noqa: F401
from hotel_site.models.site_setting import SiteSetting  # noqa: F401

# -----------------------------
# Alembic Configuration
# -----------------------------
config = context.config

# DATABASE_URL comes from .env via hotel_site.core.config
config.set_main_option("sqlalchemy.url", DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


# ===============================================================
# OFFLINE MIGRATIONS
# ===============================================================
def run_migrations_offline():
    """Run migrations in 'offline' mode."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


# ===============================================================
# ONLINE MIGRATIONS
# ===============================================================
def run_migrations_online():
    """Run migrations in 'online' mode."""
    connectable = create_engine(
        config.get_main_option("sqlalchemy.url"),
        poolclass=pool.NullPool
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite needs batch mode for ALTER
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
