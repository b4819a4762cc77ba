"""API route handlers."""

from .matches import router as matches_router
from .stats import router as stats_router
