"""Album activity domain exports."""

from .exceptions import ActivityConflict, ActivityError, IntegrityViolation, StoreUnavailable  # noqa: F401
from .models import (  # noqa: F401
	Activity,
	ActivityCreate,
	ActivitySearch,
	ActivityStatistics,
	ActivityUser,
	ActivityWithUser,
	AnyAsset,
	AssetFilter,
	AssetVisibility,
	ForAsset,
	WithoutAsset,
)
from .repo import ActivityRepository  # noqa: F401
