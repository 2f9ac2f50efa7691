"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends

from notehub.core.database import MemoryStore, get_store


# Type alias for the application store dependency
Store = Annotated[MemoryStore, Depends(get_store)]
