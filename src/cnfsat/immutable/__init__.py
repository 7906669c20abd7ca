"""
Persistent (immutable, structurally shared) collections.
"""

from .plist import PersistentList
from .pmap import Binding, PersistentMap

__all__ = ["PersistentList", "PersistentMap", "Binding"]
