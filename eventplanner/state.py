from typing import Optional

from eventplanner.store.base import DocumentStore

# Global runtime state initialized in lifespan.setup_resources
store: Optional[DocumentStore] = None
