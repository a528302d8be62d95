from huno.db.models.user import User  # noqa: F401
