from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import UserAccount  # noqa: F401
from .catalog import Category, Product  # noqa: F401
from .order import Order  # noqa: F401
from .setting import Setting  # noqa: F401
