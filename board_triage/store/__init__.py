"""Record store clients.

Key Exports:
    - TaskStore: Abstract store contract consumed by the triage engine
    - PostgrestStore: Store client for the hosted store's REST interface
"""

from board_triage.store.base import TaskStore
from board_triage.store.postgrest import PostgrestStore

__all__ = ["PostgrestStore", "TaskStore"]
