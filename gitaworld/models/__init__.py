# Import every model so Base.metadata is complete (Alembic + create_all).
from gitaworld.models.chapter import Chapter  # noqa: F401
from gitaworld.models.language import Language  # noqa: F401
from gitaworld.models.verse import Verse  # noqa: F401
from gitaworld.models.user import User  # noqa: F401
from gitaworld.models.profile import Profile  # noqa: F401
